"""Application service — orchestrates draft validation → domain op → persist for courses and badges."""
from __future__ import annotations
import logging
from typing import Callable, List, Optional

from academy.domain.badge.builder import BadgeDraftBuilder
from academy.domain.badge.models import Badge
from academy.domain.badge.service import BadgeDomainService
from academy.domain.common.result import Result, CONFLICT, NOT_FOUND
from academy.domain.course.builder import CourseDraftBuilder
from academy.domain.course.models import Course, CourseStatus
from academy.domain.course.rules import slug_candidates
from academy.domain.course.service import CourseDomainService
from academy.persistence.interfaces.badge_repository import BadgeRepository
from academy.persistence.interfaces.course_repository import CourseRepository

logger = logging.getLogger(__name__)


def _duplicate_title(kind: str, title: str) -> Result:
    return Result.fail(
        f"A {kind} titled '{title}' already exists. Choose a different title.",
        code=CONFLICT,
        details=["title"],
    )


class AuthoringAppService:
    def __init__(self, courses: CourseRepository, badges: BadgeRepository):
        self._courses = courses
        self._badges = badges
        self._course_domain = CourseDomainService()
        self._badge_domain = BadgeDomainService()

    @staticmethod
    def _free_key(base: str, title: str, lookup: Callable[[str], Optional[object]]) -> Optional[str]:
        """
        First unused slug among base, base-2, base-3, ...
        None when a record with the very same title already holds one of them.
        """
        for candidate in slug_candidates(base):
            existing = lookup(candidate)
            if existing is None:
                return candidate
            if existing.title == title:
                return None

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------
    def new_course_draft(self) -> CourseDraftBuilder:
        return CourseDraftBuilder()

    def save_course(self, builder: CourseDraftBuilder, author_id: str, publish: bool = False) -> Result[Course]:
        """Save as draft or publish. Nothing is written unless the draft is ready."""
        finalized = builder.finalize()
        if not finalized.is_success:
            return Result.from_failure(finalized)

        status = CourseStatus.PUBLISHED if publish else CourseStatus.DRAFT
        result = self._course_domain.create_course(
            finalized.value, author_id, status, order=self._courses.next_order()
        )
        if not result.is_success:
            return Result.from_failure(result)
        course = result.value
        slug = self._free_key(course.slug, course.title, self._courses.get_by_slug)
        if slug is None:
            return _duplicate_title("course", course.title)
        course.slug = slug

        if not self._courses.save_course(course):
            # Lost a race for the slug between the lookup and the insert
            return _duplicate_title("course", course.title)
        builder.mark_saved()
        logger.info("Saved course %s (%s) with %d lesson(s)", course.slug, status.value, len(course.lessons))
        return Result.ok(course)

    def publish_course(self, course_id: str) -> Result[Course]:
        course = self._courses.get_by_id(course_id)
        if not course:
            return Result.fail(f"Course '{course_id}' not found.", code=NOT_FOUND)
        result = self._course_domain.publish(course)
        if not result.is_success:
            return result
        self._courses.set_status(course.id, course.status)
        logger.info("Published course %s", course.slug)
        return result

    def list_courses(self, status: Optional[CourseStatus] = None) -> List[Course]:
        return self._courses.list_all(status)

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get_by_id(course_id)

    # ------------------------------------------------------------------
    # Badges
    # ------------------------------------------------------------------
    def new_badge_draft(self) -> BadgeDraftBuilder:
        """Badge builder over the current catalog; the builder keeps only published courses."""
        return BadgeDraftBuilder(self._courses.list_all())

    def save_badge(self, builder: BadgeDraftBuilder, author_id: str, publish: bool = False) -> Result[Badge]:
        finalized = builder.finalize()
        if not finalized.is_success:
            return Result.from_failure(finalized)

        status = CourseStatus.PUBLISHED if publish else CourseStatus.DRAFT
        result = self._badge_domain.create_badge(finalized.value, author_id, status)
        if not result.is_success:
            return Result.from_failure(result)
        badge = result.value
        key = self._free_key(badge.key, badge.title, self._badges.get_by_key)
        if key is None:
            return _duplicate_title("badge", badge.title)
        badge.key = key

        if not self._badges.save_badge(badge):
            return _duplicate_title("badge", badge.title)
        builder.mark_saved()
        logger.info("Saved badge %s (%s) over %d course(s)", badge.key, status.value, len(badge.course_ids))
        return Result.ok(badge)

    def publish_badge(self, badge_id: str) -> Result[Badge]:
        badge = self._badges.get_by_id(badge_id)
        if not badge:
            return Result.fail(f"Badge '{badge_id}' not found.", code=NOT_FOUND)
        result = self._badge_domain.publish(badge)
        if not result.is_success:
            return result
        self._badges.set_status(badge.id, badge.status)
        logger.info("Published badge %s", badge.key)
        return result

    def list_badges(self, status: Optional[CourseStatus] = None) -> List[Badge]:
        return self._badges.list_all(status)
