"""Session token and per-session client state"""

from datetime import datetime, timedelta
from typing import Optional
from dataclasses import dataclass, field

from ..stores.carts import CartStore
from ..services.menu_browser import MenuBrowser


@dataclass(frozen=True)
class SessionToken:
    """Opaque session credential with a fixed expiry"""
    value: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def issue(cls, value: str, expiry_days: int, now: Optional[datetime] = None) -> "SessionToken":
        issued_at = now or datetime.utcnow()
        return cls(
            value=value,
            issued_at=issued_at,
            expires_at=issued_at + timedelta(days=expiry_days),
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.utcnow()) >= self.expires_at


class TokenStore:
    """Holds the current session token, if any"""

    def __init__(self, expiry_days: int = 30):
        self.expiry_days = expiry_days
        self._token: Optional[SessionToken] = None

    def save(self, value: str, now: Optional[datetime] = None) -> SessionToken:
        """Store a freshly issued token"""
        self._token = SessionToken.issue(value, self.expiry_days, now)
        return self._token

    def get(self, now: Optional[datetime] = None) -> Optional[SessionToken]:
        """Current token, or None when absent or expired"""
        if self._token and self._token.is_expired(now):
            self._token = None
        return self._token

    def clear(self) -> None:
        self._token = None

    def is_authenticated(self, now: Optional[datetime] = None) -> bool:
        return self.get(now) is not None


@dataclass
class ClientSession:
    """State of one signed-in user"""
    session_id: str
    created_at: datetime
    updated_at: datetime
    token_store: TokenStore = field(default_factory=TokenStore)
    cart: CartStore = field(default_factory=CartStore)
    menu: Optional[MenuBrowser] = None
    restaurant_name: Optional[str] = None

    def __post_init__(self):
        # Cart edits count as activity
        self.cart.subscribe(lambda lines: self.touch())

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Whether the session token is still valid"""
        return self.token_store.is_authenticated(now)

    def open_menu(self) -> MenuBrowser:
        """Get the menu view state, creating it when the view is entered"""
        if self.menu is None:
            self.menu = MenuBrowser()
        self.touch()
        return self.menu

    def leave_menu(self) -> None:
        """Discard the menu view state, staged quantities included"""
        if self.menu is not None:
            self.menu.close()
            self.menu = None
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class SessionManager:
    """Manages client sessions keyed by session token"""

    def __init__(self):
        self.sessions: dict[str, ClientSession] = {}

    def start_session(self, token_store: TokenStore) -> ClientSession:
        """
        Start or resume the session for a freshly stored token.

        A session already held under the same token keeps its cart and takes
        over the new token store.
        """
        token = token_store.get()
        if token is None:
            raise ValueError("Token store holds no valid token")

        session = self.sessions.get(token.value)
        if session:
            session.token_store = token_store
            session.touch()
            return session

        now = datetime.utcnow()
        session = ClientSession(
            session_id=token.value,
            created_at=now,
            updated_at=now,
            token_store=token_store,
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Optional[ClientSession]:
        """Get session by ID"""
        return self.sessions.get(session_id)

    def get_active_session(self, session_id: str, now: Optional[datetime] = None) -> Optional[ClientSession]:
        """Get session by ID, dropping it if its token has expired"""
        session = self.sessions.get(session_id)
        if session is None:
            return None
        if not session.is_active(now):
            del self.sessions[session_id]
            return None
        return session

    def delete_session(self, session_id: str) -> bool:
        """Delete a session"""
        if session_id in self.sessions:
            del self.sessions[session_id]
            return True
        return False

    def cleanup_expired_sessions(self, now: Optional[datetime] = None) -> int:
        """Remove sessions whose token has expired"""
        expired = [
            sid for sid, session in self.sessions.items()
            if not session.is_active(now)
        ]
        for sid in expired:
            del self.sessions[sid]
        return len(expired)


# Singleton instance
session_manager = SessionManager()
