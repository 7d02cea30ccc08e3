"""Badge draft builder — eligibility, set semantics and create validation."""
import pytest

from academy.domain.badge.builder import BadgeDraftBuilder
from academy.domain.badge.models import BADGE_COLORS
from academy.domain.course.models import Course, CourseStatus, DraftState


def _course(course_id, status):
    return Course(
        id=course_id,
        slug=f"course-{course_id}",
        title=f"Course {course_id}",
        description="",
        status=status,
        created_by="u1",
        created_at="2024-01-15",
    )


@pytest.fixture
def builder():
    catalog = [
        _course("1", CourseStatus.PUBLISHED),
        _course("2", CourseStatus.PUBLISHED),
        _course("3", CourseStatus.DRAFT),
    ]
    return BadgeDraftBuilder(catalog)


def test_only_published_courses_are_available(builder):
    assert [c.id for c in builder.available_courses] == ["1", "2"]


def test_non_published_course_is_rejected(builder):
    result = builder.add_course("3")
    assert not result.is_success
    assert result.error == "course not eligible"
    assert builder.selected_course_ids == []


def test_unknown_course_is_rejected(builder):
    assert not builder.add_course("99").is_success


def test_adding_same_course_twice_keeps_one(builder):
    builder.add_course("1")
    result = builder.add_course("1")
    assert result.is_success
    assert builder.selected_course_ids == ["1"]


def test_selection_keeps_insertion_order_and_can_move(builder):
    builder.add_course("2")
    builder.add_course("1")
    assert builder.selected_course_ids == ["2", "1"]
    assert builder.move_course(1, 0).is_success
    assert builder.selected_course_ids == ["1", "2"]
    assert not builder.move_course(0, 2).is_success
    assert builder.selected_course_ids == ["1", "2"]


def test_remove_absent_course_is_noop(builder):
    builder.add_course("1")
    builder.remove_course("2")
    assert builder.selected_course_ids == ["1"]


def test_finalize_requires_title_description_and_course(builder):
    result = builder.finalize()
    assert not result.is_success
    assert result.details == ["title", "description", "course_ids"]

    builder.set_title("Intermediate User Badge")
    builder.set_description("Master core FamilySearch features")
    assert builder.finalize().details == ["course_ids"]

    builder.add_course("1")
    assert builder.can_create
    assert builder.finalize().is_success


def test_color_must_be_a_known_token(builder):
    assert not builder.set_color("pink").is_success
    assert builder.set_color(BADGE_COLORS["emerald"]).is_success
    assert builder.draft.color == BADGE_COLORS["emerald"]


def test_saved_badge_draft_is_closed(builder):
    builder.set_title("t")
    builder.mark_saved()
    assert builder.state is DraftState.SAVED
    assert builder.add_course("1").code == "invalid_state"


def test_whitespace_title_and_description_count_as_set(builder):
    builder.set_title(" ")
    builder.set_description(" ")
    builder.add_course("1")
    assert builder.can_create


def test_move_course_returns_a_copy(builder):
    builder.add_course("1")
    builder.add_course("2")
    builder.move_course(0, 1).value.clear()
    assert builder.selected_course_ids == ["2", "1"]
