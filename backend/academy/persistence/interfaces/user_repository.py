"""Abstract repository interfaces for users and their course progress."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from academy.domain.user.models import User, UserProgress


class UserRepository(ABC):

    @abstractmethod
    def save_user(self, user: User) -> bool:
        """
        Insert a new user; False if the email is already taken.
        Roles are fixed at creation, so there is no update.
        """
        ...

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def list_all(self) -> List[User]:
        ...


class ProgressRepository(ABC):

    @abstractmethod
    def get(self, user_id: str, course_id: str) -> Optional[UserProgress]:
        ...

    @abstractmethod
    def save(self, progress: UserProgress) -> None:
        """Insert or update the single progress row for (user, course)."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[UserProgress]:
        ...
