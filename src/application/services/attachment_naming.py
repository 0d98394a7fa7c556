"""Human-readable object names for attachment images.

Names are descriptive only; the object store adds a unique prefix, so two
uploads with the same name never collide.

Examples:
    contribution: "jane-doe-50-00-2024-03-01.jpg"
    cause, 3 files: "roof-repair-na-2024-02-10-1.png", "...-2.png", "...-3.png"
"""

import re
from datetime import date, datetime
from decimal import Decimal
from pathlib import PurePosixPath

from src.core.constants import MIME_EXTENSIONS, SLUG_MAX_LENGTH
from src.domain.value_objects import FileUpload

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase, collapse every non-alphanumeric run into one hyphen, trim hyphens."""
    slug = _NON_ALNUM.sub("-", value.strip().lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def format_date(value: date | datetime | None) -> str:
    if value is None:
        return "unknown-date"
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def file_extension(upload: FileUpload) -> str:
    """Extension from the original filename, else from the MIME type, else empty."""
    suffix = PurePosixPath(upload.filename.replace("\\", "/")).suffix.lower()
    if suffix:
        return suffix
    return MIME_EXTENSIONS.get(upload.content_type.lower(), "")


def contribution_base_name(member_name: str, amount: Decimal, contributed_on: date) -> str:
    return "-".join(
        (
            slugify(member_name) or "member",
            slugify(str(amount)) or "amount",
            slugify(format_date(contributed_on)) or "date",
        )
    )


def cause_base_name(title: str, amount: Decimal | None, created_at: datetime | None) -> str:
    return "-".join(
        (
            slugify(title) or "cause",
            slugify(str(amount) if amount is not None else "na") or "amount",
            slugify(format_date(created_at)) or "date",
        )
    )


def build_object_name(base_name: str, upload: FileUpload, index: int, total: int) -> str:
    """Append a 1-based "-n" suffix when several files share one base name.

    Args:
        base_name: Output of contribution_base_name or cause_base_name.
        upload: The file being named (for its extension).
        index: 0-based position within the batch.
        total: Batch size.
    """
    suffix = f"-{index + 1}" if total > 1 else ""
    return f"{base_name}{suffix}{file_extension(upload)}"
