"""
Pydantic models for dictionary records and extraction plans.
"""

from dicom_dict_gen.models.data_item import DataItem, DEFAULT_VERSION
from dicom_dict_gen.models.plan import ExtractionPlan, TableStep

__all__ = [
    'DataItem',
    'DEFAULT_VERSION',
    'ExtractionPlan',
    'TableStep',
]
