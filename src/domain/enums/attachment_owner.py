"""Entity kinds that own image attachments.

Each owner kind maps to its own attachment table and object store folder.
"""

from enum import Enum

from src.core.constants import CAUSES_FOLDER, CONTRIBUTIONS_FOLDER


class AttachmentOwner(str, Enum):
    """Owner of an attachment row (contribution proof or cause image)."""

    CONTRIBUTION = "contribution"
    CAUSE = "cause"

    @property
    def folder(self) -> str:
        """Object store folder holding this owner's images."""
        if self is AttachmentOwner.CONTRIBUTION:
            return CONTRIBUTIONS_FOLDER
        return CAUSES_FOLDER

    @property
    def label(self) -> str:
        """Human-readable entity name used in error messages."""
        return self.value.capitalize()
