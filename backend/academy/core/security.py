"""Password hashing and JWT helpers."""
from __future__ import annotations
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from academy.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES


# ------------------------------------------------------------------
# Password hashing (Direct bcrypt to avoid passlib compatibility issues)
# ------------------------------------------------------------------
def hash_password(password: str) -> str:
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8")
        )
    except ValueError:
        # malformed stored hash
        return False


# ------------------------------------------------------------------
# JWT helpers
# ------------------------------------------------------------------
def create_access_token(user_id: str, email: str, role: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": user_id,
        "email": email,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Raises jose.JWTError on a bad signature, expiry or malformed token."""
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
