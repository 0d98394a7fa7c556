"""Domain entities.

Pure business objects with no infrastructure dependencies.
"""

from src.domain.entities.attachment import Attachment
from src.domain.entities.cause import Cause
from src.domain.entities.contribution import Contribution
from src.domain.entities.member import Member
from src.domain.entities.secret_token import SecretToken

__all__ = [
    "Attachment",
    "Cause",
    "Contribution",
    "Member",
    "SecretToken",
]
