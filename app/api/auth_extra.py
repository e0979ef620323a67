# app/api/auth_extra.py
import logging
from uuid import UUID, uuid4
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr
from sqlmodel import Session, select
from app.database import get_session
from app.models.user import User
from app.core.security import get_password_hash, get_current_user, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# almacenar tokens simple (idealmente en tabla reset_tokens)
RESET_TOKENS: dict[str, str] = {}  # token -> email

class ForgotPwdIn(BaseModel):
    email: EmailStr

@router.post("/forgot-password")
def forgot_password(payload: ForgotPwdIn, session: Session = Depends(get_session)):
    email = payload.email.strip().lower()
    user = session.exec(select(User).where(User.email == email)).first()
    # No reveles si existe o no
    if user:
        token = str(uuid4())
        RESET_TOKENS[token] = user.email
        # TODO: enviar el link /auth/update-password?token=... por correo
        logger.info("Token de recuperación generado para %s", user.email)
    return {"detail": "Si el correo existe, se enviaron instrucciones."}

class ResetPwdIn(BaseModel):
    token: str
    new_password: str

@router.post("/reset-password")
def reset_password(payload: ResetPwdIn, session: Session = Depends(get_session)):
    email = RESET_TOKENS.pop(payload.token, None)
    if not email:
        raise HTTPException(status_code=400, detail="Token inválido o expirado")
    user = session.exec(select(User).where(User.email == email)).first()
    if not user:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    user.hashed_password = get_password_hash(payload.new_password)
    session.add(user)
    session.commit()
    return {"detail": "Contraseña actualizada"}

class ChangePwdIn(BaseModel):
    current_password: str
    new_password: str

@router.post("/change-password")
def change_password(
    payload: ChangePwdIn,
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    user = session.get(User, user_id)
    if not user or not verify_password(payload.current_password, user.hashed_password):
        raise HTTPException(status_code=400, detail="Contraseña actual incorrecta")
    user.hashed_password = get_password_hash(payload.new_password)
    session.add(user)
    session.commit()
    return {"detail": "Contraseña actualizada"}
