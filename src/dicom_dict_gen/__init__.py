"""
dicom-dict-gen: DICOM data dictionary generator.

Reads the DocBook XML edition of the DICOM standard and writes a flat,
tab-delimited dictionary of data elements (tag, name, keyword, VR, VM,
version).

Main package exports for user-facing API.
"""

from dicom_dict_gen.api import DictionaryPipeline, PipelineResult
from dicom_dict_gen.models import DataItem, ExtractionPlan, TableStep
from dicom_dict_gen.parsers import Landmark, XmlCursor

__all__ = [
    'DictionaryPipeline',
    'PipelineResult',
    'DataItem',
    'ExtractionPlan',
    'TableStep',
    'Landmark',
    'XmlCursor',
]

__version__ = "0.1.0"
