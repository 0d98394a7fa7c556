"""Incoming file value object.

Carries an uploaded image from the inbound adapter to AttachmentService.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileUpload:
    """Uploaded file contents plus client-supplied metadata.

    Attributes:
        filename: Original filename (may be empty; used for its extension).
        content_type: MIME type reported by the client.
        content: Raw bytes.
    """

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)
