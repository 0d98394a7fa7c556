"""Domain enums.

Usage:
    from src.domain.enums import AttachmentOwner, TokenKind
"""

from src.domain.enums.attachment_owner import AttachmentOwner
from src.domain.enums.token_kind import TokenKind

__all__ = [
    "AttachmentOwner",
    "TokenKind",
]
