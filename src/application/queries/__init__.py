"""Queries - Read operations that never change state."""

from src.application.queries.attachment_queries import ListImages

__all__ = ["ListImages"]
