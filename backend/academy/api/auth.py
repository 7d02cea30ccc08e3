"""Auth API — register, login, logout, profile endpoints."""
from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import BaseModel

from academy.api.errors import raise_for_failure
from academy.application.account_app_service import AccountAppService
from academy.container import get_account_app_service
from academy.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, AUTH_COOKIE_NAME, AUTH_COOKIE_SECURE
from academy.core.security import create_access_token, decode_access_token
from academy.domain.access.policy import Role
from academy.domain.user.models import CurrentUser, User

router = APIRouter(prefix="/auth", tags=["auth"])

_cookie = APIKeyCookie(name=AUTH_COOKIE_NAME, auto_error=False)
_bearer = HTTPBearer(auto_error=False)


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class RegisterRequest(BaseModel):
    email: str
    password: str
    display_name: str


class LoginRequest(BaseModel):
    email: str
    password: str


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "display_name": user.display_name,
        "role": user.role.value,
        "created_at": user.created_at,
    }


# ------------------------------------------------------------------
# Dependency: current user from the auth cookie, falling back to a Bearer token
# ------------------------------------------------------------------
def _token_to_user(token: str) -> CurrentUser:
    try:
        payload = decode_access_token(token)
        return CurrentUser(id=payload["sub"], email=payload["email"], role=Role(payload["role"]))
    except (JWTError, KeyError, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}")


def get_current_user(
    cookie_token: Optional[str] = Depends(_cookie),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> CurrentUser:
    token = cookie_token or (credentials.credentials if credentials else None)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return _token_to_user(token)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, svc: AccountAppService = Depends(get_account_app_service)):
    result = svc.create_user(body.email, body.password, body.display_name, Role.STUDENT)
    raise_for_failure(result)
    return serialize_user(result.value)


@router.post("/login")
def login(body: LoginRequest, response: Response, svc: AccountAppService = Depends(get_account_app_service)):
    user = svc.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(user.id, user.email, user.role.value)
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=AUTH_COOKIE_SECURE,
    )
    return {"token": token, "user": serialize_user(user)}


@router.post("/logout")
def logout(response: Response, current_user: CurrentUser = Depends(get_current_user)):
    # Stateless JWT — dropping the cookie is all there is to do.
    response.delete_cookie(AUTH_COOKIE_NAME)
    return {"detail": "Logged out successfully"}


@router.get("/profile")
def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    svc: AccountAppService = Depends(get_account_app_service),
):
    user = svc.get_user(current_user.id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return serialize_user(user)
