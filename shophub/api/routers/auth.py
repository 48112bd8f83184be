# shophub/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shophub.api.deps import get_identity
from shophub.data.database import get_db
from shophub.domain.identity import Identity
from shophub.domain.schemas import AuthOut, MessageOut, PasswordChange, UserLogin, UserRead, UserRegister
from shophub.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_service(db: Session):
    return AuthService(db)


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    return get_service(db).register(payload)


@router.post("/login", response_model=AuthOut)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    return get_service(db).login(payload)


@router.get("/profile", response_model=UserRead)
def profile(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return get_service(db).profile(identity)


@router.put("/change-password", response_model=MessageOut)
def change_password(
    payload: PasswordChange,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    get_service(db).change_password(identity, payload)
    return MessageOut(message="Password changed successfully")
