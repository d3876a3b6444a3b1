"""
Pipeline exceptions.

Only archive-level failures are fatal. Everything that goes wrong with a
single message is handled at the message boundary and never raised past it.
"""


class PipelineError(Exception):
    """Base class for errors raised by the ingestion pipeline."""


class ArchiveReadError(PipelineError):
    """Raised when the SMS archive is missing or cannot be enumerated."""

    def __init__(self, archive_path: str, message: str):
        self.archive_path = archive_path
        self.message = message
        super().__init__(f"[{archive_path}] {message}")
