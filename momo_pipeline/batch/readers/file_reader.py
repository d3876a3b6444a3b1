"""
Generic archive reader for multiple formats (XML, JSON).
"""

from pathlib import Path

from momo_pipeline.core.models import RawMessage

from .json_reader import JSONArchiveReader
from .xml_reader import XMLArchiveReader

SUFFIX_FORMATS = {
    ".xml": "xml",
    ".json": "json",
}


class ArchiveReader:
    """
    Archive reader supporting multiple formats.
    """

    def __init__(self):
        self.xml_reader = XMLArchiveReader()
        self.json_reader = JSONArchiveReader()

    def read(self, file_path: str | Path, file_format: str | None = None) -> list[RawMessage]:
        """
        Read an archive into RawMessages.

        Args:
            file_path: Path to the archive
            file_format: "xml" or "json"; inferred from the suffix when omitted
                         (unknown suffixes are read as XML)

        Returns:
            Messages in archive order

        Raises:
            ValueError: If file format is unsupported
            ArchiveReadError: If the archive is missing or malformed
        """
        file_format = (file_format or SUFFIX_FORMATS.get(Path(file_path).suffix.lower(), "xml")).lower()

        if file_format == "xml":
            return self.xml_reader.read(file_path)
        elif file_format == "json":
            return self.json_reader.read(file_path)
        else:
            raise ValueError(f"Unsupported archive format: {file_format}")
