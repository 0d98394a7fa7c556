"""SQLAlchemy repository implementations.

Repositories flush but never commit; SQLAlchemyUnitOfWork owns the
transaction boundary.
"""

from src.infrastructure.persistence.repositories.attachment_repository import (
    SQLAlchemyAttachmentRepository,
)
from src.infrastructure.persistence.repositories.cause_repository import (
    SQLAlchemyCauseRepository,
)
from src.infrastructure.persistence.repositories.contribution_repository import (
    SQLAlchemyContributionRepository,
)
from src.infrastructure.persistence.repositories.member_repository import (
    SQLAlchemyMemberRepository,
)
from src.infrastructure.persistence.repositories.secret_token_repository import (
    SQLAlchemySecretTokenRepository,
)

__all__ = [
    "SQLAlchemyAttachmentRepository",
    "SQLAlchemyCauseRepository",
    "SQLAlchemyContributionRepository",
    "SQLAlchemyMemberRepository",
    "SQLAlchemySecretTokenRepository",
]
