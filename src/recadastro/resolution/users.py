"""Login lookup for a user code."""

from __future__ import annotations

from recadastro.core.cascade import guarded
from recadastro.core.coercion import to_str
from recadastro.core.repository import BaseRepository
from recadastro.resolution import queries


class UserLookup(BaseRepository):
    """Reads ``usuarios`` rows that the session layer needs."""

    def find_login(self, user_code: int | None) -> str | None:
        """Login stored for ``user_code``.

        None when the code is None, has no row, has several rows, or the
        lookup fails.
        """
        if user_code is None:
            return None
        return guarded(
            lambda: to_str(self.scalar(queries.user_login(user_code))),
            default=None,
            event="usuario.login_lookup_failed",
            user_code=user_code,
        )


__all__ = [
    "UserLookup",
]
