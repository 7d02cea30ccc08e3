"""Domain service — learner progress bookkeeping."""
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from academy.domain.common.result import Result, NOT_FOUND
from academy.domain.course.models import Course
from academy.domain.user.models import ProgressSummary, UserProgress


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProgressDomainService:

    def complete_lesson(
        self,
        user_id: str,
        course: Course,
        lesson_id: str,
        progress: Optional[UserProgress] = None,
    ) -> Result[UserProgress]:
        """Record a finished lesson. Completing the same lesson twice changes nothing."""
        lesson_ids = [lesson.id for lesson in course.lessons]
        if lesson_id not in lesson_ids:
            return Result.fail(f"Lesson '{lesson_id}' not found in course '{course.slug}'.", code=NOT_FOUND)

        if progress is None:
            progress = UserProgress(id=str(uuid.uuid4()), user_id=user_id, course_id=course.id)
        if lesson_id not in progress.completed_lesson_ids:
            progress.completed_lesson_ids.append(lesson_id)
        required = [lesson.id for lesson in course.lessons if lesson.required] or lesson_ids
        progress.is_course_completed = set(required).issubset(progress.completed_lesson_ids)
        progress.last_updated = _now_iso()
        return Result.ok(progress)

    def summarize(
        self,
        progress_rows: Iterable[UserProgress],
        lesson_counts: dict,
        badges_earned: int,
    ) -> ProgressSummary:
        """
        Roll a user's progress rows into dashboard numbers.
        lesson_counts maps course id -> number of lessons; total_progress is completed
        lessons over all lessons of the courses the user has started.
        """
        summary = ProgressSummary(badges_earned=badges_earned)
        done = total = 0
        for row in progress_rows:
            if row.is_course_completed:
                summary.courses_completed += 1
            else:
                summary.courses_in_progress += 1
            count = lesson_counts.get(row.course_id, 0)
            total += count
            done += min(len(row.completed_lesson_ids), count)
        summary.total_progress = round(done / total * 100) if total else 0
        return summary
