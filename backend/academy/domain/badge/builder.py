"""Badge draft builder — bundles published courses into a new badge."""
from __future__ import annotations
from typing import Iterable, List, Optional

from academy.domain.badge.models import BadgeDraft
from academy.domain.badge.rules import (
    COURSE_NOT_ELIGIBLE,
    is_course_eligible,
    missing_fields,
    validate_color,
    validate_for_create,
)
from academy.domain.common.ordering import move_to
from academy.domain.common.result import Result, INVALID_STATE, VALIDATION
from academy.domain.course.models import Course, DraftState, TERMINAL_STATES


class BadgeDraftBuilder:
    """
    Selected courses behave as an ordered set: adding an id twice keeps one entry.
    The catalog is filtered to published courses up front; anything else is not eligible.
    """

    def __init__(self, catalog: Iterable[Course], draft: Optional[BadgeDraft] = None):
        self.available_courses: List[Course] = [c for c in catalog if is_course_eligible(c)]
        self._eligible_ids = {c.id for c in self.available_courses}
        self.draft = draft or BadgeDraft()
        self._terminal: Optional[DraftState] = None

    @property
    def state(self) -> DraftState:
        if self._terminal is not None:
            return self._terminal
        if not missing_fields(self.draft):
            return DraftState.READY
        d = self.draft
        if d.title or d.description or d.course_ids:
            return DraftState.EDITING
        return DraftState.EMPTY

    @property
    def can_create(self) -> bool:
        return self.state is DraftState.READY

    @property
    def selected_course_ids(self) -> List[str]:
        return list(self.draft.course_ids)

    def _ensure_open(self) -> Result[None]:
        if self.state in TERMINAL_STATES:
            return Result.fail(f"Badge draft is already {self.state.value}.", code=INVALID_STATE)
        return Result.ok()

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------
    def set_title(self, title: str) -> Result[None]:
        opened = self._ensure_open()
        if opened.is_success:
            self.draft.title = title
        return opened

    def set_description(self, description: str) -> Result[None]:
        opened = self._ensure_open()
        if opened.is_success:
            self.draft.description = description
        return opened

    def set_icon(self, icon: str) -> Result[None]:
        opened = self._ensure_open()
        if opened.is_success:
            self.draft.icon = icon
        return opened

    def set_color(self, color: str) -> Result[str]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        checked = validate_color(color)
        if checked.is_success:
            self.draft.color = color
        return checked

    # ------------------------------------------------------------------
    # Course selection
    # ------------------------------------------------------------------
    def add_course(self, course_id: str) -> Result[List[str]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        if course_id not in self._eligible_ids:
            return Result.fail(COURSE_NOT_ELIGIBLE, code=VALIDATION, details=[course_id])
        if course_id not in self.draft.course_ids:
            self.draft.course_ids.append(course_id)
        return Result.ok(self.selected_course_ids)

    def remove_course(self, course_id: str) -> Result[List[str]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        if course_id in self.draft.course_ids:
            self.draft.course_ids.remove(course_id)
        return Result.ok(self.selected_course_ids)

    def move_course(self, from_index: int, to_index: int) -> Result[List[str]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        moved = move_to(self.draft.course_ids, from_index, to_index)
        if not moved.is_success:
            return moved
        return Result.ok(self.selected_course_ids)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def finalize(self) -> Result[BadgeDraft]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return validate_for_create(self.draft)

    def mark_saved(self) -> None:
        self._terminal = DraftState.SAVED

    def discard(self) -> Result[None]:
        opened = self._ensure_open()
        if opened.is_success:
            self.draft = BadgeDraft()
            self._terminal = DraftState.DISCARDED
        return opened
