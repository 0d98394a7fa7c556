"""Domain protocols (ports).

Usage:
    from src.domain.protocols import UnitOfWork, ObjectStoreProtocol
"""

from src.domain.protocols.attachment_repository import AttachmentRepository
from src.domain.protocols.cause_repository import CauseRepository
from src.domain.protocols.contribution_repository import ContributionRepository
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.mail_transport_protocol import MailTransportProtocol
from src.domain.protocols.member_repository import MemberRepository
from src.domain.protocols.object_store_protocol import (
    ObjectInfo,
    ObjectStoreProtocol,
    StoredObject,
)
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.secret_token_repository import SecretTokenRepository
from src.domain.protocols.secret_token_service_protocol import SecretTokenServiceProtocol
from src.domain.protocols.template_renderer_protocol import (
    RenderedEmail,
    TemplateRendererProtocol,
)
from src.domain.protocols.unit_of_work import (
    DuplicateKeyError,
    UnitOfWork,
    UnitOfWorkFactory,
)

__all__ = [
    "AttachmentRepository",
    "CauseRepository",
    "ContributionRepository",
    "DuplicateKeyError",
    "LoggerProtocol",
    "MailTransportProtocol",
    "MemberRepository",
    "ObjectInfo",
    "ObjectStoreProtocol",
    "PasswordHashingProtocol",
    "RenderedEmail",
    "SecretTokenRepository",
    "SecretTokenServiceProtocol",
    "StoredObject",
    "TemplateRendererProtocol",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
