"""Commands - Write operations that change state.

Commands represent intent to perform an action. They are immutable
dataclasses with imperative names (RegisterMember, AttachImages).

Each command has a corresponding handler in commands/handlers/.
"""

from src.application.commands.attachment_commands import (
    AttachImages,
    RemoveImage,
    ReplaceImage,
)
from src.application.commands.cause_commands import CreateCause, DeleteCause, UpdateCause
from src.application.commands.contribution_commands import (
    DeleteContribution,
    RecordContribution,
    UpdateContribution,
)
from src.application.commands.member_commands import (
    ConfirmPasswordReset,
    RegisteredMember,
    RegisterMember,
    RequestPasswordReset,
    ResendVerification,
    VerifyEmail,
)

__all__ = [
    # Member commands
    "ConfirmPasswordReset",
    "RegisterMember",
    "RegisteredMember",
    "RequestPasswordReset",
    "ResendVerification",
    "VerifyEmail",
    # Contribution commands
    "DeleteContribution",
    "RecordContribution",
    "UpdateContribution",
    # Cause commands
    "CreateCause",
    "DeleteCause",
    "UpdateCause",
    # Attachment commands
    "AttachImages",
    "RemoveImage",
    "ReplaceImage",
]
