"""Business rules for badges — course eligibility and create/publish validation."""
from __future__ import annotations
from typing import List

from academy.domain.badge.models import BADGE_COLORS, BadgeDraft
from academy.domain.common.result import Result, VALIDATION
from academy.domain.course.models import Course

COURSE_NOT_ELIGIBLE = "course not eligible"


def is_course_eligible(course: Course) -> bool:
    """Only published courses can count toward a badge."""
    return course.is_published


def validate_color(color: str) -> Result[str]:
    if color not in BADGE_COLORS.values():
        return Result.fail(
            f"'{color}' is not a badge color. Must be one of {sorted(BADGE_COLORS.values())}.",
            code=VALIDATION,
        )
    return Result.ok(color)


def missing_fields(draft: BadgeDraft) -> List[str]:
    missing = []
    if not draft.title:
        missing.append("title")
    if not draft.description:
        missing.append("description")
    if not draft.course_ids:
        missing.append("course_ids")
    return missing


def validate_for_create(draft: BadgeDraft) -> Result[BadgeDraft]:
    missing = missing_fields(draft)
    if missing:
        return Result.fail(
            f"Badge draft is not ready to create. Missing: {', '.join(missing)}.",
            code=VALIDATION,
            details=missing,
        )
    return Result.ok(draft)
