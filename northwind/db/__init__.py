"""Store access: models and session management."""

from .session import SessionManager

__all__ = ['SessionManager']
