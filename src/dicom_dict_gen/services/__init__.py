"""
I/O services around the extraction core.

- discover_xml_files: recursive input discovery
- DictionaryWriter: header templating and dictionary output
"""

from dicom_dict_gen.services.file_discovery import DiscoveredFiles, discover_xml_files
from dicom_dict_gen.services.dictionary_writer import (
    DictionaryWriter,
    load_header_template,
    render_header,
    sort_items,
)

__all__ = [
    'DiscoveredFiles',
    'discover_xml_files',
    'DictionaryWriter',
    'load_header_template',
    'render_header',
    'sort_items',
]
