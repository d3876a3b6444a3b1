"""
SMS archive readers.
"""

from .file_reader import ArchiveReader
from .json_reader import JSONArchiveReader
from .xml_reader import XMLArchiveReader

__all__ = [
    "ArchiveReader",
    "JSONArchiveReader",
    "XMLArchiveReader",
]
