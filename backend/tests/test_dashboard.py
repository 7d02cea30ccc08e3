"""Admin dashboard controller against the real SQLite-backed services."""
import uuid

import pytest

from academy.application.admin_dashboard import ACCESS_DENIED_MESSAGE, Tab, UsersTabView
from academy.container import build_admin_dashboard, get_account_app_service, get_learning_app_service
from academy.domain.access.policy import Role
from academy.domain.course.models import ContentKind
from academy.domain.user.models import CurrentUser


def _user(role):
    return CurrentUser(id=str(uuid.uuid4()), email=f"{role.value}@example.com", role=role)


def _unique(prefix):
    return f"{prefix} {uuid.uuid4().hex[:8]}"


@pytest.fixture
def student_ctl():
    return build_admin_dashboard(_user(Role.STUDENT))


@pytest.fixture
def admin_ctl():
    return build_admin_dashboard(_user(Role.ADMIN))


@pytest.fixture
def super_ctl():
    return build_admin_dashboard(_user(Role.SUPER_ADMIN))


def _ready_builder(ctl, title=None):
    builder = ctl.start_course_draft().value
    builder.apply_template("quick-tutorial")
    builder.set_title(title or _unique("Dashboard Course"))
    builder.set_description("Built from the dashboard")
    return builder


# ------------------------------------------------------------------
# Access
# ------------------------------------------------------------------
def test_student_gets_access_denied_view(student_ctl):
    view = student_ctl.view()
    assert not view.access_granted
    assert view.tabs == []
    assert view.active_tab is None
    assert view.message == ACCESS_DENIED_MESSAGE


def test_student_operations_are_forbidden(student_ctl):
    assert student_ctl.start_course_draft().code == "forbidden"
    assert student_ctl.start_badge_draft().code == "forbidden"
    assert student_ctl.publish_course("anything").code == "forbidden"
    assert student_ctl.templates().code == "forbidden"
    assert student_ctl.tab_view(Tab.COURSES).code == "forbidden"
    result = student_ctl.create_account("x@example.com", "password123", "X", Role.STUDENT)
    assert result.code == "forbidden"


def test_admin_sees_all_tabs(admin_ctl):
    view = admin_ctl.view()
    assert view.access_granted
    assert view.tabs == [Tab.USERS, Tab.COURSES, Tab.BADGES]
    assert view.active_tab is Tab.USERS
    assert not view.capabilities.manage_admins


def test_unknown_tab_is_rejected(admin_ctl):
    assert admin_ctl.open_tab("settings").code == "validation"


def test_users_tab_lists_accounts_with_summaries(super_ctl):
    result = super_ctl.tab_view("users")
    assert result.is_success
    tab = result.value
    assert isinstance(tab, UsersTabView)
    assert tab.can_manage_admins
    assert any(row.user.email == "superadmin@example.com" for row in tab.users)
    assert super_ctl.active_tab is Tab.USERS


# ------------------------------------------------------------------
# Courses
# ------------------------------------------------------------------
def test_save_unready_draft_fails_without_writing(admin_ctl):
    before = len(admin_ctl.tab_view(Tab.COURSES).value.courses)
    builder = admin_ctl.start_course_draft().value
    builder.set_title(_unique("Unready"))

    result = admin_ctl.save_course(builder)
    assert not result.is_success
    assert result.details == ["description", "items"]
    assert len(admin_ctl.tab_view(Tab.COURSES).value.courses) == before


def test_save_then_publish_course(admin_ctl):
    builder = _ready_builder(admin_ctl)
    saved = admin_ctl.save_course(builder)
    assert saved.is_success
    course = saved.value
    assert not course.is_published
    assert [lesson.title for lesson in course.lessons] == ["Tutorial Video", "Practice Exercise"]
    assert builder.state.value == "saved"

    published = admin_ctl.publish_course(course.id)
    assert published.is_success
    assert published.value.is_published
    assert admin_ctl.publish_course(course.id).code == "invalid_state"


def test_duplicate_title_conflicts(admin_ctl):
    title = _unique("Same Title")
    assert admin_ctl.save_course(_ready_builder(admin_ctl, title)).is_success
    second = _ready_builder(admin_ctl, title)
    result = admin_ctl.save_course(second)
    assert result.code == "conflict"
    assert second.state.value == "ready"


def test_titles_without_ascii_get_distinct_slugs(admin_ctl):
    first = admin_ctl.save_course(_ready_builder(admin_ctl, "家谱入门"))
    second = admin_ctl.save_course(_ready_builder(admin_ctl, "族谱进阶"))
    assert first.is_success and second.is_success
    assert first.value.slug != second.value.slug
    assert second.value.slug.startswith("course")


def test_titles_differing_in_punctuation_get_suffixed_slug(admin_ctl):
    tag = uuid.uuid4().hex[:8]
    first = admin_ctl.save_course(_ready_builder(admin_ctl, f"C++ Basics {tag}")).value
    second = admin_ctl.save_course(_ready_builder(admin_ctl, f"C Basics {tag}")).value
    assert first.slug == f"c-basics-{tag}"
    assert second.slug == f"c-basics-{tag}-2"


def test_badges_without_ascii_titles_get_distinct_keys(admin_ctl):
    course = admin_ctl.save_course(_ready_builder(admin_ctl), publish=True).value
    keys = []
    for title in ("家谱徽章", "族谱徽章"):
        builder = admin_ctl.start_badge_draft().value
        builder.set_title(title)
        builder.set_description("d")
        builder.add_course(course.id)
        result = admin_ctl.create_badge(builder)
        assert result.is_success
        keys.append(result.value.key)
    assert keys[0] != keys[1]
    assert all(k.startswith("badge") for k in keys)


def test_cancel_course_draft_discards(admin_ctl):
    builder = _ready_builder(admin_ctl)
    assert admin_ctl.cancel_course_draft(builder).is_success
    assert builder.state.value == "discarded"
    assert builder.items == []


# ------------------------------------------------------------------
# Badges and progress
# ------------------------------------------------------------------
def test_badge_awarded_when_course_completed(admin_ctl):
    course = admin_ctl.save_course(_ready_builder(admin_ctl), publish=True).value

    badge_builder = admin_ctl.start_badge_draft().value
    badge_builder.set_title(_unique("Tutorial Finisher"))
    badge_builder.set_description("Finished the quick tutorial")
    assert badge_builder.add_course(course.id).is_success
    badge = admin_ctl.create_and_publish_badge(badge_builder).value
    assert badge.is_published

    learning = get_learning_app_service()
    learner = get_account_app_service().create_user(
        f"{uuid.uuid4().hex[:8]}@example.com", "password123", "Learner"
    ).value.id
    first = learning.complete_lesson(learner, course.id, course.lessons[0].id)
    assert first.is_success and not first.value.is_course_completed
    assert learning.badges_for(learner) == []

    second = learning.complete_lesson(learner, course.id, course.lessons[1].id)
    assert second.value.is_course_completed
    assert [b.id for b in learning.badges_for(learner)] == [badge.id]

    summary = learning.summary_for(learner)
    assert summary.courses_completed == 1
    assert summary.badges_earned == 1


def test_draft_course_is_not_eligible_for_badges(admin_ctl):
    draft_course = admin_ctl.save_course(_ready_builder(admin_ctl)).value
    badge_builder = admin_ctl.start_badge_draft().value
    result = badge_builder.add_course(draft_course.id)
    assert result.error == "course not eligible"


def test_content_kinds_survive_save(admin_ctl):
    builder = admin_ctl.start_course_draft().value
    builder.set_title(_unique("Mixed"))
    builder.set_description("All kinds")
    video = builder.add_item(ContentKind.VIDEO).value
    builder.update_item(video.id, title="Watch", video_url="https://example.com/v.mp4")
    quiz = builder.add_item(ContentKind.QUIZ).value
    builder.add_question(quiz.id)
    builder.update_question_text(quiz.id, 0, "Where are memories stored?")
    builder.set_correct_answer(quiz.id, 0, 2)

    course = admin_ctl.save_course(builder).value
    assert course.lessons[0].video_url == "https://example.com/v.mp4"
    assert course.lessons[1].questions[0].correct_answer == 2
    assert course.lessons[1].video_url is None


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------
def test_super_admin_creates_admin(super_ctl):
    email = f"{uuid.uuid4().hex[:8]}@example.com"
    result = super_ctl.create_account(email, "password123", "New Admin", Role.ADMIN)
    assert result.is_success
    assert result.value.role is Role.ADMIN


def test_admin_cannot_create_admin_but_can_create_student(admin_ctl):
    email = f"{uuid.uuid4().hex[:8]}@example.com"
    assert admin_ctl.create_account(email, "password123", "Nope", Role.ADMIN).code == "forbidden"
    assert admin_ctl.create_account(email, "password123", "Student", Role.STUDENT).is_success


def test_cancel_badge_draft(admin_ctl):
    builder = admin_ctl.start_badge_draft().value
    builder.set_title("Abandoned")
    assert admin_ctl.cancel_badge_draft(builder).is_success
    assert builder.state.value == "discarded"
    assert builder.draft.title == ""
