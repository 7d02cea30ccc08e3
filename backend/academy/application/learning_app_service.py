"""Application service — learner catalog, lesson progress and badge awards."""
from __future__ import annotations
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from academy.domain.badge.models import Badge
from academy.domain.badge.service import BadgeDomainService
from academy.domain.common.result import Result, NOT_FOUND
from academy.domain.course.models import Course, CourseStatus
from academy.domain.user.models import ProgressSummary, UserBadge, UserProgress
from academy.domain.user.service import ProgressDomainService
from academy.persistence.interfaces.badge_repository import BadgeRepository
from academy.persistence.interfaces.course_repository import CourseRepository
from academy.persistence.interfaces.user_repository import ProgressRepository

logger = logging.getLogger(__name__)


class LearningAppService:
    def __init__(self, courses: CourseRepository, badges: BadgeRepository, progress: ProgressRepository):
        self._courses = courses
        self._badges = badges
        self._progress = progress
        self._progress_domain = ProgressDomainService()
        self._badge_domain = BadgeDomainService()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------
    def list_courses(self) -> List[Course]:
        return self._courses.list_all(CourseStatus.PUBLISHED)

    def get_course(self, slug: str) -> Optional[Course]:
        """Published course by slug; drafts are invisible to learners."""
        course = self._courses.get_by_slug(slug)
        if course is None or not course.is_published:
            return None
        return course

    def list_badges(self) -> List[Badge]:
        return self._badges.list_all(CourseStatus.PUBLISHED)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------
    def complete_lesson(self, user_id: str, course_id: str, lesson_id: str) -> Result[UserProgress]:
        course = self._courses.get_by_id(course_id)
        if course is None or not course.is_published:
            return Result.fail(f"Course '{course_id}' not found.", code=NOT_FOUND)

        existing = self._progress.get(user_id, course_id)
        was_completed = bool(existing and existing.is_course_completed)
        result = self._progress_domain.complete_lesson(user_id, course, lesson_id, existing)
        if not result.is_success:
            return result

        progress = result.value
        self._progress.save(progress)
        if progress.is_course_completed and not was_completed:
            logger.info("User %s completed course %s", user_id, course.slug)
            self._award_badges(user_id)
        return Result.ok(progress)

    def _award_badges(self, user_id: str) -> List[Badge]:
        completed = [p.course_id for p in self._progress.list_for_user(user_id) if p.is_course_completed]
        awarded = []
        now = datetime.now(timezone.utc).isoformat()
        for badge in self._badge_domain.earned_badges(self._badges.list_all(CourseStatus.PUBLISHED), completed):
            user_badge = UserBadge(id=str(uuid.uuid4()), user_id=user_id, badge_id=badge.id, awarded_at=now)
            if self._badges.award(user_badge):
                logger.info("Awarded badge %s to user %s", badge.key, user_id)
                awarded.append(badge)
        return awarded

    def progress_for(self, user_id: str) -> List[UserProgress]:
        return self._progress.list_for_user(user_id)

    def badges_for(self, user_id: str) -> List[Badge]:
        return self._badges.list_for_user(user_id)

    def summary_for(self, user_id: str) -> ProgressSummary:
        rows = self._progress.list_for_user(user_id)
        lesson_counts = {}
        for row in rows:
            course = self._courses.get_by_id(row.course_id)
            lesson_counts[row.course_id] = len(course.lessons) if course else 0
        return self._progress_domain.summarize(rows, lesson_counts, len(self._badges.list_for_user(user_id)))
