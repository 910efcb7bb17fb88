"""Domain models for stored memo files."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """File content downloaded from storage."""

    path: str
    content: bytes
    content_type: str

    @property
    def file_name(self) -> str:
        """Return the last path segment."""
        return self.path.rsplit("/", maxsplit=1)[-1]
