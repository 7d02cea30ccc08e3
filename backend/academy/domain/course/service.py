"""Domain service — turns finished course drafts into catalog records and publishes them."""
from __future__ import annotations
import copy
import uuid
from datetime import datetime, timezone

from academy.domain.common.result import Result, INVALID_STATE
from academy.domain.course.models import Course, CourseDraft, CourseStatus, Lesson, QuizItem, VideoItem
from academy.domain.course.rules import slugify, validate_for_save


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class CourseDomainService:
    """
    Pure domain operations — no I/O. All methods return Result[T].
    The application layer calls these and then persists via the repository.
    """

    def create_course(
        self,
        draft: CourseDraft,
        author_id: str,
        status: CourseStatus,
        order: int = 0,
    ) -> Result[Course]:
        """Materialize a ready draft as a Course; each content item becomes a lesson in draft order."""
        validation = validate_for_save(draft)
        if not validation.is_success:
            return Result.from_failure(validation)

        course_id = _new_id()
        lessons = [
            Lesson(
                id=_new_id(),
                course_id=course_id,
                order=index,
                title=item.title,
                kind=item.kind,
                body=item.body,
                video_url=item.video_url if isinstance(item, VideoItem) else None,
                questions=copy.deepcopy(item.questions) if isinstance(item, QuizItem) else [],
                required=item.required,
            )
            for index, item in enumerate(draft.items)
        ]
        course = Course(
            id=course_id,
            slug=slugify(draft.title),
            title=draft.title.strip(),
            description=draft.description.strip(),
            status=CourseStatus(status),
            created_by=author_id,
            created_at=_now_iso(),
            order=order,
            estimated_duration=draft.duration_minutes,
            lessons=lessons,
        )
        return Result.ok(course)

    def publish(self, course: Course) -> Result[Course]:
        if course.is_published:
            return Result.fail(f"Course '{course.title}' is already published.", code=INVALID_STATE)
        course.status = CourseStatus.PUBLISHED
        return Result.ok(course)
