"""Content item operations — create, edit, reorder and duplicate the items of a course draft."""
from __future__ import annotations
import copy
import dataclasses
import uuid
from typing import List, Optional

from academy.domain.common.ordering import move_to
from academy.domain.common.result import Result, VALIDATION
from academy.domain.course.models import ContentItem, ContentKind, ITEM_TYPES, QuizItem, QuizQuestion

COPY_SUFFIX = " (Copy)"


def _new_id() -> str:
    return str(uuid.uuid4())


def create_item(kind: ContentKind) -> ContentItem:
    """New item of the given kind with empty title/body. Unknown kinds raise ValueError."""
    return ITEM_TYPES[ContentKind(kind)](id=_new_id())


def editable_fields(item: ContentItem) -> set:
    return {f.name for f in dataclasses.fields(item)} - {"id"}


class ContentItemList:
    """
    Ordered, in-place view over a draft's items.
    Lookups by id that miss are no-ops for update/remove; index-based operations are bounds-checked.
    """

    def __init__(self, items: List[ContentItem]):
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    @property
    def ids(self) -> List[str]:
        return [item.id for item in self._items]

    def find(self, item_id: str) -> Optional[ContentItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def _index_of(self, item_id: str) -> int:
        return next((i for i, item in enumerate(self._items) if item.id == item_id), -1)

    # ------------------------------------------------------------------
    # Item operations
    # ------------------------------------------------------------------
    def add(self, kind: ContentKind) -> ContentItem:
        item = create_item(kind)
        self._items.append(item)
        return item

    def update(self, item_id: str, **fields) -> Result[Optional[ContentItem]]:
        item = self.find(item_id)
        if item is None:
            return Result.ok(None)

        unknown = sorted(set(fields) - editable_fields(item))
        if unknown:
            return Result.fail(
                f"Field(s) {', '.join(unknown)} not valid for a {item.kind.value} item.",
                code=VALIDATION,
                details=unknown,
            )
        if "questions" in fields:
            for index, question in enumerate(fields["questions"]):
                if not 0 <= question.correct_answer < len(question.options):
                    return Result.fail(
                        f"Question {index}: correct answer {question.correct_answer} is out of range "
                        f"for {len(question.options)} option(s).",
                        code=VALIDATION,
                    )
            fields["questions"] = [copy.deepcopy(q) for q in fields["questions"]]
        for name, value in fields.items():
            setattr(item, name, value)
        return Result.ok(item)

    def remove(self, item_id: str) -> None:
        index = self._index_of(item_id)
        if index >= 0:
            del self._items[index]

    def duplicate(self, item_id: str) -> Optional[ContentItem]:
        index = self._index_of(item_id)
        if index < 0:
            return None
        original = self._items[index]
        clone = dataclasses.replace(
            copy.deepcopy(original),
            id=_new_id(),
            title=f"{original.title}{COPY_SUFFIX}",
        )
        self._items.insert(index + 1, clone)
        return clone

    def move_to(self, from_index: int, to_index: int) -> Result[List[ContentItem]]:
        return move_to(self._items, from_index, to_index)

    # ------------------------------------------------------------------
    # Quiz questions
    # ------------------------------------------------------------------
    def _quiz(self, item_id: str) -> Result[Optional[QuizItem]]:
        item = self.find(item_id)
        if item is None:
            return Result.ok(None)
        if not isinstance(item, QuizItem):
            return Result.fail(f"Item '{item_id}' is a {item.kind.value} item, not a quiz.", code=VALIDATION)
        return Result.ok(item)

    def _question(self, item_id: str, question_index: int) -> Result[Optional[QuizQuestion]]:
        found = self._quiz(item_id)
        if not found.is_success or found.value is None:
            return found
        questions = found.value.questions
        if not 0 <= question_index < len(questions):
            return Result.fail(
                f"Question index {question_index} is out of range for {len(questions)} question(s).",
                code=VALIDATION,
            )
        return Result.ok(questions[question_index])

    def add_question(self, item_id: str) -> Result[Optional[QuizQuestion]]:
        found = self._quiz(item_id)
        if not found.is_success or found.value is None:
            return found
        question = QuizQuestion()
        found.value.questions.append(question)
        return Result.ok(question)

    def update_question_text(self, item_id: str, question_index: int, text: str) -> Result[Optional[QuizQuestion]]:
        found = self._question(item_id, question_index)
        if found.is_success and found.value is not None:
            found.value.text = text
        return found

    def update_question_option(
        self, item_id: str, question_index: int, option_index: int, value: str
    ) -> Result[Optional[QuizQuestion]]:
        found = self._question(item_id, question_index)
        if not found.is_success or found.value is None:
            return found
        question = found.value
        if not 0 <= option_index < len(question.options):
            return Result.fail(
                f"Option index {option_index} is out of range for {len(question.options)} option(s).",
                code=VALIDATION,
            )
        question.options[option_index] = value
        return Result.ok(question)

    def set_correct_answer(self, item_id: str, question_index: int, answer_index: int) -> Result[Optional[QuizQuestion]]:
        found = self._question(item_id, question_index)
        if not found.is_success or found.value is None:
            return found
        question = found.value
        if not 0 <= answer_index < len(question.options):
            return Result.fail(
                f"Answer index {answer_index} is out of range for {len(question.options)} option(s).",
                code=VALIDATION,
            )
        question.correct_answer = answer_index
        return Result.ok(question)

    def remove_question(self, item_id: str, question_index: int) -> Result[Optional[QuizQuestion]]:
        found = self._question(item_id, question_index)
        if found.is_success and found.value is not None:
            self.find(item_id).questions.pop(question_index)
        return found
