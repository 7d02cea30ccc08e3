"""Business rules for course drafts — readiness, completion and save validation."""
from __future__ import annotations
import itertools
import re
from typing import Iterator, List, Optional

from academy.domain.common.result import Result, VALIDATION
from academy.domain.course.models import CourseDraft


def _is_set(value: Optional[str]) -> bool:
    return bool(value)


def missing_fields(draft: CourseDraft) -> List[str]:
    """Fields that keep the draft from being saved, in form order."""
    missing = []
    if not _is_set(draft.title):
        missing.append("title")
    if not _is_set(draft.description):
        missing.append("description")
    if not draft.items:
        missing.append("items")
    return missing


def is_ready(draft: CourseDraft) -> bool:
    return not missing_fields(draft)


def completion_percentage(draft: CourseDraft) -> int:
    """Share of {title, description, at least one item, duration} that is filled in."""
    satisfied = sum([
        _is_set(draft.title),
        _is_set(draft.description),
        len(draft.items) > 0,
        draft.duration_minutes is not None,
    ])
    return round(satisfied / 4 * 100)


def validate_duration(minutes: Optional[int]) -> Result[Optional[int]]:
    if minutes is not None and minutes <= 0:
        return Result.fail("Estimated duration must be a positive number of minutes.", code=VALIDATION)
    return Result.ok(minutes)


def validate_for_save(draft: CourseDraft) -> Result[CourseDraft]:
    missing = missing_fields(draft)
    if missing:
        return Result.fail(
            f"Course draft is not ready to save. Missing: {', '.join(missing)}.",
            code=VALIDATION,
            details=missing,
        )
    return Result.ok(draft)


def slugify(title: str, fallback: str = "course") -> str:
    """ASCII slug of the title; titles with no ASCII letters or digits get the fallback."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or fallback


def slug_candidates(base: str) -> Iterator[str]:
    """base, base-2, base-3, ... for picking the first slug not already taken."""
    yield base
    for n in itertools.count(2):
        yield f"{base}-{n}"
