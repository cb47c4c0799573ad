"""
Pydantic model for one data dictionary entry.

A DataItem is produced by the row decoder from one table row of the
standard's registry tables and written as one line of the dictionary file.
"""

from pydantic import BaseModel, Field


DEFAULT_VERSION = "DICOM"


class DataItem(BaseModel):
    """
    One decoded data element record.

    All fields are the trimmed text of the corresponding table cell.
    Records are immutable once created; the only operation applied to
    a collection of them afterwards is sorting by tag.

    Attributes:
        tag: Element tag as written in the standard, e.g. "(0010,0010)"
        name: Human readable element name
        keyword: Element keyword
        vr: Value representation
        vm: Value multiplicity
        version: Source edition label ("DICOM", "Ret", "DICOS", "DICONDE")

    Example:
        >>> item = DataItem(
        ...     tag="(0010,0010)",
        ...     name="Patient's Name",
        ...     keyword="PatientName",
        ...     vr="PN",
        ...     vm="1",
        ... )
        >>> item.to_line()
        '(0010,0010)\\t"Patient\\'s Name"\\tPatientName\\tPN\\t1\\tDICOM'
    """

    tag: str = Field(
        default="",
        description="Element tag text (may be empty for malformed rows)",
        examples=["(0010,0010)"]
    )

    name: str = Field(
        ...,
        min_length=1,
        description="Element name",
        examples=["Patient's Name"]
    )

    keyword: str = Field(
        ...,
        min_length=1,
        description="Element keyword",
        examples=["PatientName"]
    )

    vr: str = Field(
        ...,
        min_length=1,
        description="Value representation",
        examples=["PN"]
    )

    vm: str = Field(
        ...,
        min_length=1,
        description="Value multiplicity",
        examples=["1"]
    )

    version: str = Field(
        default=DEFAULT_VERSION,
        description="Source edition label",
        examples=["DICOM", "Ret", "DICOS", "DICONDE"]
    )

    model_config = {
        "frozen": True,
    }

    def to_line(self) -> str:
        """Render the record as one tab-delimited dictionary line."""
        return (
            f'{self.tag}\t"{self.name}"\t{self.keyword}\t'
            f'{self.vr}\t{self.vm}\t{self.version}'
        )
