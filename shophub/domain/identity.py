# shophub/domain/identity.py
from dataclasses import dataclass
from typing import Optional

from shophub.domain.errors import Unauthorized


@dataclass(frozen=True)
class Identity:
    """Rozwiazany wywolujacy: zalogowany user albo gosc (user_id = None)."""

    user_id: Optional[int] = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    def require_user(self, message: str = "Authentication required") -> int:
        if self.user_id is None:
            raise Unauthorized(message)
        return self.user_id


GUEST = Identity()
