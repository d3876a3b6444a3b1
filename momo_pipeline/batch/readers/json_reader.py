"""
JSON archive reader.
"""

import json
from pathlib import Path

from momo_pipeline.core.errors import ArchiveReadError
from momo_pipeline.core.models import RawMessage


class JSONArchiveReader:
    """
    Reads a JSON archive holding either a list of message attribute objects
    or an object with that list under "smses".
    """

    def read(self, file_path: str | Path) -> list[RawMessage]:
        """
        Read every message in the archive, in document order.

        Args:
            file_path: Path to the JSON archive

        Returns:
            List of RawMessage

        Raises:
            ArchiveReadError: If the file is missing, is not valid JSON, or
                              does not hold a list of objects
        """
        path = Path(file_path)
        if not path.is_file():
            raise ArchiveReadError(str(path), "Archive file not found")

        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            raise ArchiveReadError(str(path), f"Malformed JSON: {e}") from e

        if isinstance(document, dict):
            document = document.get("smses")

        if not isinstance(document, list) or not all(isinstance(item, dict) for item in document):
            raise ArchiveReadError(str(path), "Archive must contain a list of message objects")

        return [RawMessage.from_attributes(item) for item in document]
