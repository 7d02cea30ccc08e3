"""Course draft builder — one uncommitted authoring session for a course."""
from __future__ import annotations
from typing import List, Optional

from academy.domain.common.result import Result, INVALID_STATE, NOT_FOUND
from academy.domain.course.content import ContentItemList, create_item
from academy.domain.course.models import (
    ContentItem,
    ContentKind,
    CourseDraft,
    DraftState,
    QuizQuestion,
    TERMINAL_STATES,
)
from academy.domain.course.rules import (
    completion_percentage,
    is_ready as draft_is_ready,
    missing_fields,
    validate_duration,
    validate_for_save,
)
from academy.domain.course.templates import get_template


class CourseDraftBuilder:
    """
    State machine over a single CourseDraft:

        empty -> editing -> ready -> saved | discarded

    The non-terminal state is derived from the draft after every mutation, so
    clearing everything by hand lands back in `empty`. Once saved or discarded
    the builder refuses further edits.
    """

    def __init__(self, draft: Optional[CourseDraft] = None):
        self.draft = draft or CourseDraft()
        self._content = ContentItemList(self.draft.items)
        self._terminal: Optional[DraftState] = None
        self.show_template_selector = False
        self.show_content_type_selector = False

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def state(self) -> DraftState:
        if self._terminal is not None:
            return self._terminal
        if draft_is_ready(self.draft):
            return DraftState.READY
        d = self.draft
        if d.title or d.description or d.duration_minutes is not None or d.items or d.template_id:
            return DraftState.EDITING
        return DraftState.EMPTY

    @property
    def is_ready(self) -> bool:
        return self.state is DraftState.READY

    @property
    def can_save(self) -> bool:
        return self.is_ready

    @property
    def completion(self) -> int:
        return completion_percentage(self.draft)

    @property
    def missing(self) -> List[str]:
        return missing_fields(self.draft)

    @property
    def items(self) -> List[ContentItem]:
        return list(self.draft.items)

    def _ensure_open(self) -> Result[None]:
        if self.state in TERMINAL_STATES:
            return Result.fail(
                f"Course draft is already {self.state.value}; start a new draft to keep editing.",
                code=INVALID_STATE,
            )
        return Result.ok()

    # ------------------------------------------------------------------
    # Selectors (form UI state)
    # ------------------------------------------------------------------
    def open_template_selector(self) -> Result[None]:
        if self.state is not DraftState.EMPTY:
            return Result.fail("Templates can only be applied to an empty draft.", code=INVALID_STATE)
        self.show_template_selector = True
        return Result.ok()

    def open_content_type_selector(self) -> Result[None]:
        opened = self._ensure_open()
        if opened.is_success:
            self.show_content_type_selector = True
        return opened

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------
    def apply_template(self, template_id: str) -> Result[List[ContentItem]]:
        if self.state is not DraftState.EMPTY:
            return Result.fail(
                f"Templates can only be applied to an empty draft (draft is {self.state.value}).",
                code=INVALID_STATE,
            )
        template = get_template(template_id)
        if template is None:
            return Result.fail(f"Template '{template_id}' not found.", code=NOT_FOUND)

        for entry in template.content:
            item = create_item(entry.kind)
            item.title = entry.title
            item.body = entry.placeholder
            self.draft.items.append(item)
        self.draft.template_id = template.id
        self.show_template_selector = False
        return Result.ok(self.items)

    # ------------------------------------------------------------------
    # Field edits
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

    def set_duration(self, minutes: Optional[int]) -> Result[Optional[int]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        checked = validate_duration(minutes)
        if checked.is_success:
            self.draft.duration_minutes = minutes
        return checked

    # ------------------------------------------------------------------
    # Item operations
    # ------------------------------------------------------------------
    def add_item(self, kind: ContentKind) -> Result[ContentItem]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        item = self._content.add(kind)
        self.show_content_type_selector = False
        return Result.ok(item)

    def update_item(self, item_id: str, **fields) -> Result[Optional[ContentItem]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.update(item_id, **fields)

    def remove_item(self, item_id: str) -> Result[None]:
        opened = self._ensure_open()
        if opened.is_success:
            self._content.remove(item_id)
        return opened

    def duplicate_item(self, item_id: str) -> Result[Optional[ContentItem]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return Result.ok(self._content.duplicate(item_id))

    def move_item(self, from_index: int, to_index: int) -> Result[List[ContentItem]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.move_to(from_index, to_index)

    def add_question(self, item_id: str) -> Result[Optional[QuizQuestion]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.add_question(item_id)

    def update_question_text(self, item_id: str, question_index: int, text: str) -> Result[Optional[QuizQuestion]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.update_question_text(item_id, question_index, text)

    def update_question_option(
        self, item_id: str, question_index: int, option_index: int, value: str
    ) -> Result[Optional[QuizQuestion]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.update_question_option(item_id, question_index, option_index, value)

    def set_correct_answer(self, item_id: str, question_index: int, answer_index: int) -> Result[Optional[QuizQuestion]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.set_correct_answer(item_id, question_index, answer_index)

    def remove_question(self, item_id: str, question_index: int) -> Result[Optional[QuizQuestion]]:
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return self._content.remove_question(item_id, question_index)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> Result[None]:
        """Clear every field and item; back to `empty` with all selectors closed."""
        opened = self._ensure_open()
        if not opened.is_success:
            return opened
        self.draft.title = ""
        self.draft.description = ""
        self.draft.duration_minutes = None
        self.draft.template_id = None
        self.draft.items.clear()
        self.show_template_selector = False
        self.show_content_type_selector = False
        return Result.ok()

    def discard(self) -> Result[None]:
        opened = self._ensure_open()
        if not opened.is_success:
            return opened
        self.reset()
        self._terminal = DraftState.DISCARDED
        return Result.ok()

    def finalize(self) -> Result[CourseDraft]:
        """Gate for save/publish: the draft itself when ready, otherwise the missing fields."""
        opened = self._ensure_open()
        if not opened.is_success:
            return Result.from_failure(opened)
        return validate_for_save(self.draft)

    def mark_saved(self) -> None:
        self._terminal = DraftState.SAVED
