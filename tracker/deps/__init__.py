"""Request dependencies shared by the routers."""

from .auth import AuthContext, require_session, require_token

__all__ = ["AuthContext", "require_session", "require_token"]
