"""Domain service — badge creation, publishing and award eligibility."""
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Iterable, List

from academy.domain.badge.models import Badge, BadgeDraft
from academy.domain.badge.rules import validate_for_create
from academy.domain.common.result import Result, INVALID_STATE
from academy.domain.course.models import CourseStatus
from academy.domain.course.rules import slugify


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BadgeDomainService:

    def create_badge(self, draft: BadgeDraft, author_id: str, status: CourseStatus) -> Result[Badge]:
        validation = validate_for_create(draft)
        if not validation.is_success:
            return Result.from_failure(validation)
        badge = Badge(
            id=str(uuid.uuid4()),
            key=slugify(draft.title, fallback="badge"),
            title=draft.title.strip(),
            description=draft.description.strip(),
            icon=draft.icon,
            color=draft.color,
            status=CourseStatus(status),
            created_by=author_id,
            created_at=_now_iso(),
            course_ids=list(draft.course_ids),
        )
        return Result.ok(badge)

    def publish(self, badge: Badge) -> Result[Badge]:
        if badge.is_published:
            return Result.fail(f"Badge '{badge.title}' is already published.", code=INVALID_STATE)
        badge.status = CourseStatus.PUBLISHED
        return Result.ok(badge)

    def earned_badges(self, badges: Iterable[Badge], completed_course_ids: Iterable[str]) -> List[Badge]:
        """Published badges whose every required course is in completed_course_ids."""
        completed = set(completed_course_ids)
        return [
            b for b in badges
            if b.is_published and b.course_ids and completed.issuperset(b.course_ids)
        ]
