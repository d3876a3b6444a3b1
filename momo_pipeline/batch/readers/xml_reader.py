"""
XML archive reader for SMS backup exports.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

from momo_pipeline.core.errors import ArchiveReadError
from momo_pipeline.core.models import RawMessage


class XMLArchiveReader:
    """
    Reads an SMS backup export of the form:

    ```xml
    <smses count="2">
      <sms address="M-Money" body="You have received ..." type="1"
           readable_date="10 May 2024 4:30:58 PM" contact_name="(Unknown)" />
      ...
    </smses>
    ```

    Every attribute of each <sms> element is kept in RawMessage.attributes.
    """

    def __init__(self, root_tag: str = "smses", element_tag: str = "sms"):
        """
        Initialize XML reader.

        Args:
            root_tag: Tag of the document root
            element_tag: Tag of the elements holding one message each
        """
        self.root_tag = root_tag
        self.element_tag = element_tag

    def read(self, file_path: str | Path) -> list[RawMessage]:
        """
        Read every message in the archive, in document order.

        Args:
            file_path: Path to the XML archive

        Returns:
            List of RawMessage

        Raises:
            ArchiveReadError: If the file is missing, is not well-formed XML,
                              or is not rooted at <smses>
        """
        path = Path(file_path)
        if not path.is_file():
            raise ArchiveReadError(str(path), "Archive file not found")

        try:
            root = ET.parse(path).getroot()
        except (ET.ParseError, OSError) as e:
            raise ArchiveReadError(str(path), f"Malformed XML: {e}") from e

        if root.tag != self.root_tag:
            raise ArchiveReadError(
                str(path), f"Root element must be <{self.root_tag}>, found <{root.tag}>"
            )

        return [
            RawMessage.from_attributes(dict(element.attrib))
            for element in root.iter(self.element_tag)
        ]
