"""Database models for persistence layer.

SQLAlchemy models mapping to database tables. These are infrastructure
concerns and should not be imported by the domain layer.

Models Organization:
    - member.py: Member model
    - secret_token.py: Email verification and password reset tokens
    - contribution.py: Contribution model
    - cause.py: Cause model
    - attachment.py: contribution_images and cause_images

Note:
    Domain entities (dataclasses) live in src/domain/entities/ and are
    mapped to/from these models by the repositories.
"""

from src.infrastructure.persistence.models.attachment import CauseImage, ContributionImage
from src.infrastructure.persistence.models.cause import Cause
from src.infrastructure.persistence.models.contribution import Contribution
from src.infrastructure.persistence.models.member import Member
from src.infrastructure.persistence.models.secret_token import SecretToken

__all__ = [
    "Cause",
    "CauseImage",
    "Contribution",
    "ContributionImage",
    "Member",
    "SecretToken",
]
