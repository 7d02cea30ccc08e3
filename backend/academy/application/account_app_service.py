"""Application service — user registration, login checks and account creation."""
from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from academy.core.security import hash_password, verify_password
from academy.domain.access.policy import Role
from academy.domain.common.result import Result, CONFLICT, VALIDATION
from academy.domain.user.models import User
from academy.persistence.interfaces.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _email_taken(email: str) -> Result:
    return Result.fail(f"An account for '{email}' already exists.", code=CONFLICT)


class AccountAppService:
    def __init__(self, repo: UserRepository):
        self._repo = repo

    def create_user(self, email: str, password: str, display_name: str, role: Role = Role.STUDENT) -> Result[User]:
        """Create an account with a fixed role. Emails are unique, case-insensitively."""
        email = (email or "").strip().lower()
        display_name = (display_name or "").strip()
        if not email or "@" not in email:
            return Result.fail("A valid email is required.", code=VALIDATION, details=["email"])
        if not display_name:
            return Result.fail("Display name is required.", code=VALIDATION, details=["display_name"])
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return Result.fail(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
                code=VALIDATION,
                details=["password"],
            )
        if self._repo.get_by_email(email):
            return _email_taken(email)

        user = User(
            id=str(uuid.uuid4()),
            email=email,
            display_name=display_name,
            role=Role(role),
            created_at=datetime.now(timezone.utc).isoformat(),
            password_hash=hash_password(password),
        )
        if not self._repo.save_user(user):
            return _email_taken(email)
        logger.info("Created %s account %s", user.role.value, user.email)
        return Result.ok(user)

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self._repo.get_by_email((email or "").strip().lower())
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login for %s", email)
            return None
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        return self._repo.get_by_id(user_id)

    def list_users(self) -> List[User]:
        return self._repo.list_all()
