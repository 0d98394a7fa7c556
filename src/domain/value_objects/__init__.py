"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.email import Email
from src.domain.value_objects.file_upload import FileUpload
from src.domain.value_objects.password import Password

__all__ = [
    "Email",
    "FileUpload",
    "Password",
]
