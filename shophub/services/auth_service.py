# shophub/services/auth_service.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shophub.data.models.user import UserModel
from shophub.domain.errors import Conflict, Unauthorized
from shophub.domain.identity import GUEST, Identity
from shophub.domain.schemas import PasswordChange, UserLogin, UserRead, UserRegister
from shophub.repos.user_repo import UserRepo
from shophub.utils.logging import get_logger
from shophub.utils.settings import JWT_ALGORITHM, JWT_EXPIRES_MINUTES, JWT_SECRET

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=JWT_EXPIRES_MINUTES))
    return jwt.encode({"sub": str(user_id), "exp": expire}, JWT_SECRET, algorithm=JWT_ALGORITHM)


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserRegister) -> Dict[str, Any]:
        if self.repo.exists(payload.username, payload.email):
            raise Conflict("Username or email already exists")

        user = UserModel(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #rownolegla rejestracja na ten sam email/username
            self.repo.rollback()
            raise Conflict("Username or email already exists")

        logger.info(f"Zarejestrowano usera {created.id}", extra={"user_id": created.id})
        return {"user": UserRead.model_validate(created), "token": create_token(created.id)}

    def login(self, payload: UserLogin) -> Dict[str, Any]:
        user = self.repo.get_by_email(payload.email)
        if not user or not verify_password(payload.password, user.password_hash):
            raise Unauthorized("Invalid email or password")

        return {"user": UserRead.model_validate(user), "token": create_token(user.id)}

    def profile(self, identity: Identity) -> UserRead:
        user = self.repo.get_user(identity.require_user())
        if not user:
            raise Unauthorized("User not found")
        return UserRead.model_validate(user)

    def change_password(self, identity: Identity, payload: PasswordChange) -> None:
        user = self.repo.get_user(identity.require_user())
        if not user:
            raise Unauthorized("User not found")

        if not verify_password(payload.current_password, user.password_hash):
            raise Unauthorized("Current password is incorrect")

        user.password_hash = hash_password(payload.new_password)
        self.repo.save(user)
        logger.info(f"Zmieniono haslo usera {user.id}", extra={"user_id": user.id})

    def resolve_identity(self, token: Optional[str]) -> Identity:
        """
        brak tokenu -> gosc
        zly / wygasly token albo nieistniejacy user -> Unauthorized
        """
        if not token:
            return GUEST

        try:
            payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        except ExpiredSignatureError:
            raise Unauthorized("Token expired")
        except JWTError:
            raise Unauthorized("Invalid token")

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise Unauthorized("Invalid token")

        if not self.repo.get_user(user_id):
            raise Unauthorized("User not found")

        return Identity(user_id=user_id)
