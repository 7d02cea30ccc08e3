"""Abstract repository interface for badges and the badges users have earned."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from academy.domain.badge.models import Badge
from academy.domain.course.models import CourseStatus
from academy.domain.user.models import UserBadge


class BadgeRepository(ABC):

    @abstractmethod
    def save_badge(self, badge: Badge) -> bool:
        """Insert the badge row and its ordered course references. Returns False if the key is already taken."""
        ...

    @abstractmethod
    def get_by_id(self, badge_id: str) -> Optional[Badge]:
        """Return the Badge with course_ids and students_earned populated, or None."""
        ...

    @abstractmethod
    def get_by_key(self, key: str) -> Optional[Badge]:
        ...

    @abstractmethod
    def list_all(self, status: Optional[CourseStatus] = None) -> List[Badge]:
        ...

    @abstractmethod
    def set_status(self, badge_id: str, status: CourseStatus) -> bool:
        ...

    @abstractmethod
    def award(self, user_badge: UserBadge) -> bool:
        """Record that a user earned a badge. Returns False if it was already awarded."""
        ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> List[Badge]:
        """Badges the user has earned, oldest award first."""
        ...
