"""
Extraction plan models.

An ExtractionPlan is the declarative query run against one standard part:
the registry tables to visit, in the order they appear in the document.
Plans are loaded from resources/extraction_plans.yaml via the config facade.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class TableStep(BaseModel):
    """
    One registry table to extract.

    Columns are read positionally and must appear in the order
    tag, name, keyword, VR, VM, and an optional version hint.

    Attributes:
        table_id: Value of the table's xml:id attribute
        title: Table caption, for logging only
        version: Version label forced on every row of this table
    """

    table_id: str = Field(
        ...,
        min_length=1,
        description="xml:id of the <table> element",
        examples=["table_6-1"]
    )

    title: str = Field(
        default="",
        description="Table caption (informational)",
        examples=["Registry of DICOM Data Elements"]
    )

    version: Optional[str] = Field(
        default=None,
        description="Version label applied to every row instead of the default",
        examples=["Ret"]
    )

    model_config = {"frozen": True}


class ExtractionPlan(BaseModel):
    """
    Ordered table steps for one part of the standard.

    The order of `tables` must match the document order: the cursor
    only moves forward, so a table listed before one that precedes it
    in the document can never be found.
    """

    part: str = Field(
        ...,
        min_length=1,
        description="xml:id of the <book> element identifying the part",
        examples=["PS3.6"]
    )

    description: str = Field(
        default="",
        description="Part title (informational)"
    )

    tables: List[TableStep] = Field(
        default_factory=list,
        description="Tables to extract, in document order"
    )

    model_config = {"frozen": True}

    @field_validator('tables')
    @classmethod
    def validate_tables_not_empty(cls, v: List[TableStep]) -> List[TableStep]:
        """A plan without tables would select a document and extract nothing."""
        if not v:
            raise ValueError("Extraction plan must list at least one table")
        return v
