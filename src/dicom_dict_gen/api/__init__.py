"""
User-facing API for dicom-dict-gen.
"""

from dicom_dict_gen.api.pipeline import DictionaryPipeline, PipelineResult

__all__ = [
    'DictionaryPipeline',
    'PipelineResult',
]
