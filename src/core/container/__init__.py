"""Container module - composition root.

- infrastructure: adapter factories (logger, object store, mail, templates, bcrypt)
- app_context: AppContext, the long-lived owner of services and handler factories

    from src.core.container import AppContext

    async with AppContext.create() as app:
        ...
"""

from src.core.container.app_context import AppContext
from src.core.container.infrastructure import (
    build_logger,
    build_mail_transport,
    build_object_store,
    build_password_service,
    build_template_renderer,
)

__all__ = [
    "AppContext",
    "build_logger",
    "build_mail_transport",
    "build_object_store",
    "build_password_service",
    "build_template_renderer",
]
