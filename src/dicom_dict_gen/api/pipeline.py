"""
High-level pipeline orchestrator for dictionary generation.

DictionaryPipeline coordinates the complete workflow:
- Discover XML documents (via discover_xml_files)
- Read the edition label from the release notes
- Run every extraction plan against the document it selects
- Sort and write the dictionary (via DictionaryWriter)

Design Philosophy:
- Fail fast: any missing document or landmark aborts the run
- No partial output: the output file is only opened after all parsing
- Records are owned by the run, never by module state
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from dicom_dict_gen.config import AppConfig, get_app_config, get_extraction_plans
from dicom_dict_gen.models.data_item import DataItem
from dicom_dict_gen.models.plan import ExtractionPlan
from dicom_dict_gen.parsers.plan_runner import extract_part, read_edition
from dicom_dict_gen.services.dictionary_writer import DictionaryWriter, load_header_template
from dicom_dict_gen.services.file_discovery import DiscoveredFiles, discover_xml_files

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Summary of one generator run."""
    edition: str
    item_count: int
    document_count: int
    output_path: Path


def _echo(message: str) -> None:
    sys.stdout.write(message)
    sys.stdout.flush()


class DictionaryPipeline:
    """
    Generates the data dictionary from a directory of standard documents.

    Usage:
        >>> pipeline = DictionaryPipeline()
        >>> result = pipeline.execute("docbook/", "dicom.dic")
        Read xml files ...OK
        Parse dicom version ...OK
        Parse xml files ...OK
        Write dictionary to file ...OK
        >>> result.item_count
        5102
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        plans: Optional[List[ExtractionPlan]] = None,
        writer: Optional[DictionaryWriter] = None,
        echo: Callable[[str], None] = _echo
    ):
        """
        Args:
            config: Configuration (global config when None)
            plans: Extraction plans (packaged plans when None)
            writer: Dictionary writer (default writer when None)
            echo: Receives progress text for stdout
        """
        self._config = config or get_app_config()
        self._plans = plans if plans is not None else get_extraction_plans()
        self._writer = writer or DictionaryWriter()
        self._echo = echo

    @contextmanager
    def _stage(self, label: str) -> Iterator[None]:
        self._echo(f"{label} ...")
        yield
        self._echo("OK\n")

    def discover(self, input_dir: Union[str, Path]) -> DiscoveredFiles:
        """Find candidate documents and the edition document."""
        return discover_xml_files(
            input_dir,
            suffix=self._config.xml_suffix,
            edition_marker=self._config.edition_marker
        )

    def read_edition(self, files: DiscoveredFiles) -> str:
        """Read the edition label from the release notes."""
        return read_edition(files.edition_document, self._config.chunk_size)

    def extract(self, files: DiscoveredFiles) -> List[DataItem]:
        """Run every extraction plan, in plan order."""
        items: List[DataItem] = []
        for plan in self._plans:
            items.extend(extract_part(files.documents, plan, self._config))
        return items

    def execute(
        self,
        input_dir: Union[str, Path],
        output_path: Union[str, Path],
        header_path: Optional[Union[str, Path]] = None
    ) -> PipelineResult:
        """
        Run the full generation.

        Args:
            input_dir: Directory with the standard's XML documents
            output_path: Dictionary file to write
            header_path: Custom header template (packaged default when None)

        Returns:
            PipelineResult

        Raises:
            DictGenError: If a document, landmark or argument is missing
            OSError: If reading or writing fails
        """
        template = load_header_template(header_path)

        with self._stage("Read xml files"):
            files = self.discover(input_dir)

        with self._stage("Parse dicom version"):
            edition = self.read_edition(files)

        with self._stage("Parse xml files"):
            items = self.extract(files)

        with self._stage("Write dictionary to file"):
            path = self._writer.write_dictionary(output_path, items, template, edition)

        logger.info(f"Generated dictionary for edition {edition}: {len(items)} items")

        return PipelineResult(
            edition=edition,
            item_count=len(items),
            document_count=len(files.documents),
            output_path=path
        )
