"""
Configuration management using Pydantic Settings.

Provides type-safe access to:
- Version labels used by the row decoder (default, retired, alternate standards)
- File discovery settings (suffix, edition document marker)
- Token source chunk size and log level
- Extraction plans loaded from resources/extraction_plans.yaml
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dicom_dict_gen.models.plan import ExtractionPlan


RESOURCES_DIR = Path(__file__).parent / 'resources'
PLANS_PATH = RESOURCES_DIR / 'extraction_plans.yaml'
DEFAULT_HEADER_PATH = RESOURCES_DIR / 'dictionary_header.txt'


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Environment Variables (prefix DICT_GEN_, also read from .env):
        DICT_GEN_DEFAULT_VERSION: Version label for current-edition rows
        DICT_GEN_RETIRED_VERSION: Version label for retired rows
        DICT_GEN_ALTERNATE_STANDARDS: JSON list of standard names kept verbatim
        DICT_GEN_XML_SUFFIX: Suffix of candidate input files
        DICT_GEN_EDITION_MARKER: Path substring identifying the edition document
        DICT_GEN_CHUNK_SIZE: Bytes fed to the XML parser per read
        DICT_GEN_LOG_LEVEL: Logging level name

    Example:
        >>> config = get_app_config()
        >>> config.default_version
        'DICOM'
        >>> config.alternate_standards
        ['DICOS', 'DICONDE']
    """

    default_version: str = Field(
        default="DICOM",
        min_length=1,
        description="Version label for rows without a recognized version hint"
    )

    retired_version: str = Field(
        default="Ret",
        min_length=1,
        description="Version label for rows whose hint starts with RET"
    )

    alternate_standards: List[str] = Field(
        default_factory=lambda: ["DICOS", "DICONDE"],
        description="Version hints copied verbatim into the record"
    )

    xml_suffix: str = Field(
        default=".xml",
        description="Only files whose path ends with this suffix are read"
    )

    edition_marker: str = Field(
        default="releasenotes",
        min_length=1,
        description="Path substring identifying the release notes document"
    )

    chunk_size: int = Field(
        default=64 * 1024,
        gt=0,
        description="Number of bytes fed to the XML parser at a time"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level name"
    )

    model_config = SettingsConfigDict(
        env_prefix='DICT_GEN_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).

    Returns:
        Singleton AppConfig instance
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


_extraction_plans: Optional[List[ExtractionPlan]] = None


def load_extraction_plans(path: Path) -> List[ExtractionPlan]:
    """
    Load and validate extraction plans from a YAML file.

    Args:
        path: YAML file containing a list of plans

    Returns:
        Plans in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not contain a list of plans
    """
    if not path.exists():
        raise FileNotFoundError(f"Extraction plan file not found at {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, list):
        raise ValueError(
            f"Extraction plan file {path} must contain a list of plans, "
            f"got {type(data).__name__}"
        )

    return [ExtractionPlan.model_validate(entry) for entry in data]


def get_extraction_plans() -> List[ExtractionPlan]:
    """
    Get the packaged extraction plans (PS3.6 then PS3.7).

    Result is cached after first load.
    """
    global _extraction_plans
    if _extraction_plans is None:
        _extraction_plans = load_extraction_plans(PLANS_PATH)
    return _extraction_plans
