"""Course domain models — pure Python, no DB or HTTP dependencies."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional


class ContentKind(str, Enum):
    VIDEO = "video"
    READING = "reading"
    QUIZ = "quiz"


class CourseStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class DraftState(str, Enum):
    EMPTY = "empty"
    EDITING = "editing"
    READY = "ready"
    SAVED = "saved"
    DISCARDED = "discarded"


TERMINAL_STATES = {DraftState.SAVED, DraftState.DISCARDED}

OPTIONS_PER_QUESTION = 4


@dataclass
class QuizQuestion:
    text: str = ""
    options: List[str] = field(default_factory=lambda: [""] * OPTIONS_PER_QUESTION)
    correct_answer: int = 0


# ------------------------------------------------------------------
# Content items: one variant per kind, each carrying only its own fields
# ------------------------------------------------------------------
@dataclass
class ContentItem:
    id: str
    title: str = ""
    body: str = ""
    required: bool = True

    kind: ClassVar[ContentKind]


@dataclass
class VideoItem(ContentItem):
    video_url: str = ""

    kind: ClassVar[ContentKind] = ContentKind.VIDEO


@dataclass
class ReadingItem(ContentItem):
    kind: ClassVar[ContentKind] = ContentKind.READING


@dataclass
class QuizItem(ContentItem):
    questions: List[QuizQuestion] = field(default_factory=list)

    kind: ClassVar[ContentKind] = ContentKind.QUIZ


ITEM_TYPES = {
    ContentKind.VIDEO: VideoItem,
    ContentKind.READING: ReadingItem,
    ContentKind.QUIZ: QuizItem,
}


@dataclass
class CourseDraft:
    title: str = ""
    description: str = ""
    duration_minutes: Optional[int] = None
    items: List[ContentItem] = field(default_factory=list)
    template_id: Optional[str] = None


# ------------------------------------------------------------------
# Persisted records
# ------------------------------------------------------------------
@dataclass
class Lesson:
    id: str
    course_id: str
    order: int
    title: str
    kind: ContentKind
    body: str = ""
    video_url: Optional[str] = None
    questions: List[QuizQuestion] = field(default_factory=list)
    required: bool = True


@dataclass
class Course:
    id: str
    slug: str
    title: str
    description: str
    status: CourseStatus
    created_by: str
    created_at: str
    order: int = 0
    estimated_duration: Optional[int] = None
    lessons: List[Lesson] = field(default_factory=list)

    @property
    def is_published(self) -> bool:
        return self.status is CourseStatus.PUBLISHED


@dataclass(frozen=True)
class TemplateEntry:
    kind: ContentKind
    title: str
    placeholder: str


@dataclass(frozen=True)
class CourseTemplate:
    id: str
    name: str
    description: str
    icon: str
    content: tuple
