# Core modules

from .config import settings
from .session import SessionManager, ClientSession, SessionToken, TokenStore

__all__ = ["settings", "SessionManager", "ClientSession", "SessionToken", "TokenStore"]
