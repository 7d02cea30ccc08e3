"""Abstract repository interface for the Course aggregate (course + ordered lessons)."""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from academy.domain.course.models import Course, CourseStatus


class CourseRepository(ABC):

    @abstractmethod
    def save_course(self, course: Course) -> bool:
        """Insert the course row and its lessons. Returns False if the slug is already taken."""
        ...

    @abstractmethod
    def get_by_id(self, course_id: str) -> Optional[Course]:
        """Return the Course with lessons populated, or None."""
        ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[Course]:
        ...

    @abstractmethod
    def list_all(self, status: Optional[CourseStatus] = None) -> List[Course]:
        """Return courses ordered by sort order, optionally filtered by status."""
        ...

    @abstractmethod
    def set_status(self, course_id: str, status: CourseStatus) -> bool:
        """Returns True if a course was updated."""
        ...

    @abstractmethod
    def next_order(self) -> int:
        """Sort position for the next course appended to the catalog."""
        ...
