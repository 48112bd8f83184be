# shophub/api/deps.py
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from shophub.data.database import get_db
from shophub.domain.errors import Unauthorized
from shophub.domain.identity import Identity
from shophub.services.auth_service import AuthService
from shophub.services.notification_service import NotificationService


def get_notifier() -> NotificationService:
    return NotificationService()


def get_identity(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Identity:
    """
    Opcjonalne uwierzytelnienie: brak naglowka = gosc.
    Co dalej z gosciem decyduje serwis.
    """
    if not authorization:
        return AuthService(db).resolve_identity(None)

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Invalid authentication credentials")

    return AuthService(db).resolve_identity(token.strip())
