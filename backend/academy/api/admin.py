"""Admin dashboard API — role-gated tabs, course/badge authoring and staff accounts."""
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from academy.api.auth import get_current_user, serialize_user
from academy.api.courses import serialize_badge, serialize_course
from academy.api.errors import raise_for_failure
from academy.application.admin_dashboard import (
    AdminDashboardController,
    BadgesTabView,
    CoursesTabView,
    DashboardView,
    UsersTabView,
)
from academy.container import build_admin_dashboard
from academy.domain.access.policy import Role
from academy.domain.badge.builder import BadgeDraftBuilder
from academy.domain.badge.models import DEFAULT_COLOR, DEFAULT_ICON
from academy.domain.common.result import Result
from academy.domain.course.builder import CourseDraftBuilder
from academy.domain.course.models import ContentKind, CourseTemplate, QuizQuestion
from academy.domain.user.models import CurrentUser

router = APIRouter(prefix="/admin", tags=["admin"])


def get_dashboard(current_user: CurrentUser = Depends(get_current_user)) -> AdminDashboardController:
    return build_admin_dashboard(current_user)


# ------------------------------------------------------------------
# Pydantic schemas
# ------------------------------------------------------------------
class QuizQuestionBody(BaseModel):
    text: str = ""
    options: List[str] = Field(default_factory=lambda: [""] * 4)
    correct_answer: int = 0


class ContentItemBody(BaseModel):
    kind: ContentKind
    title: str = ""
    body: str = ""
    required: bool = True
    video_url: Optional[str] = None
    questions: Optional[List[QuizQuestionBody]] = None


class CourseDraftBody(BaseModel):
    title: str = ""
    description: str = ""
    duration_minutes: Optional[int] = None
    template_id: Optional[str] = None
    items: List[ContentItemBody] = []
    publish: bool = False


class BadgeDraftBody(BaseModel):
    title: str = ""
    description: str = ""
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR
    course_ids: List[str] = []
    publish: bool = False


class AccountBody(BaseModel):
    email: str
    password: str
    display_name: str
    role: Role


# ------------------------------------------------------------------
# Draft replay: a request carries a whole draft, applied through a builder in order
# ------------------------------------------------------------------
def _replay_course(builder: CourseDraftBuilder, body: CourseDraftBody) -> Result[CourseDraftBuilder]:
    if body.template_id:
        applied = builder.apply_template(body.template_id)
        if not applied.is_success:
            return Result.from_failure(applied)
    for step in (
        builder.set_title(body.title),
        builder.set_description(body.description),
        builder.set_duration(body.duration_minutes),
    ):
        if not step.is_success:
            return Result.from_failure(step)

    for item_body in body.items:
        added = builder.add_item(item_body.kind)
        if not added.is_success:
            return Result.from_failure(added)
        fields = {"title": item_body.title, "body": item_body.body, "required": item_body.required}
        if item_body.video_url is not None:
            fields["video_url"] = item_body.video_url
        if item_body.questions is not None:
            fields["questions"] = [QuizQuestion(**q.model_dump()) for q in item_body.questions]
        updated = builder.update_item(added.value.id, **fields)
        if not updated.is_success:
            return Result.from_failure(updated)
    return Result.ok(builder)


def _replay_badge(builder: BadgeDraftBuilder, body: BadgeDraftBody) -> Result[BadgeDraftBuilder]:
    for step in (
        builder.set_title(body.title),
        builder.set_description(body.description),
        builder.set_icon(body.icon),
        builder.set_color(body.color),
    ):
        if not step.is_success:
            return Result.from_failure(step)
    for course_id in body.course_ids:
        added = builder.add_course(course_id)
        if not added.is_success:
            return Result.from_failure(added)
    return Result.ok(builder)


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def _serialize_view(view: DashboardView) -> dict:
    return {
        "access_granted": view.access_granted,
        "tabs": [t.value for t in view.tabs],
        "active_tab": view.active_tab.value if view.active_tab else None,
        "capabilities": {
            "can_manage_admins": view.capabilities.manage_admins,
            "can_manage_content": view.capabilities.manage_content,
            "can_view_student_data": view.capabilities.view_student_data,
        },
        "message": view.message,
    }


def _serialize_template(t: CourseTemplate) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "description": t.description,
        "icon": t.icon,
        "content": [
            {"kind": e.kind.value, "title": e.title, "placeholder": e.placeholder} for e in t.content
        ],
    }


def _serialize_tab(tab_view) -> dict:
    if isinstance(tab_view, UsersTabView):
        return {
            "can_manage_admins": tab_view.can_manage_admins,
            "users": [
                {
                    **serialize_user(row.user),
                    "courses_completed": row.summary.courses_completed,
                    "courses_in_progress": row.summary.courses_in_progress,
                    "badges_earned": row.summary.badges_earned,
                    "total_progress": row.summary.total_progress,
                }
                for row in tab_view.users
            ],
        }
    if isinstance(tab_view, CoursesTabView):
        return {
            "courses": [serialize_course(c, include_answers=True) for c in tab_view.courses],
            "templates": [_serialize_template(t) for t in tab_view.templates],
        }
    if isinstance(tab_view, BadgesTabView):
        return {
            "badges": [serialize_badge(b) for b in tab_view.badges],
            "available_courses": [serialize_course(c, include_lessons=False) for c in tab_view.available_courses],
        }
    raise TypeError(f"Unknown tab view {type(tab_view).__name__}")


def _serialize_builder(builder: CourseDraftBuilder) -> dict:
    return {
        "state": builder.state.value,
        "completion": builder.completion,
        "can_save": builder.can_save,
        "missing": builder.missing,
        "template_id": builder.draft.template_id,
        "item_count": len(builder.items),
    }


# ------------------------------------------------------------------
# Dashboard
# ------------------------------------------------------------------
@router.get("/dashboard")
def dashboard(ctl: AdminDashboardController = Depends(get_dashboard)):
    return _serialize_view(ctl.view())


@router.get("/dashboard/{tab}")
def dashboard_tab(tab: str, ctl: AdminDashboardController = Depends(get_dashboard)):
    result = ctl.tab_view(tab)
    raise_for_failure(result)
    return {**_serialize_view(ctl.view()), "data": _serialize_tab(result.value)}


@router.get("/templates")
def list_templates(ctl: AdminDashboardController = Depends(get_dashboard)):
    result = ctl.templates()
    raise_for_failure(result)
    return [_serialize_template(t) for t in result.value]


# ------------------------------------------------------------------
# Courses
# ------------------------------------------------------------------
@router.post("/courses/preview")
def preview_course(body: CourseDraftBody, ctl: AdminDashboardController = Depends(get_dashboard)):
    """Replay a draft without saving; reports state, completion and what is still missing."""
    started = ctl.start_course_draft()
    raise_for_failure(started)
    replayed = _replay_course(started.value, body)
    raise_for_failure(replayed)
    return _serialize_builder(replayed.value)


@router.post("/courses", status_code=status.HTTP_201_CREATED)
def create_course(body: CourseDraftBody, ctl: AdminDashboardController = Depends(get_dashboard)):
    started = ctl.start_course_draft()
    raise_for_failure(started)
    replayed = _replay_course(started.value, body)
    raise_for_failure(replayed)
    result = ctl.save_course(replayed.value, publish=body.publish)
    raise_for_failure(result)
    return serialize_course(result.value, include_answers=True)


@router.post("/courses/{course_id}/publish")
def publish_course(course_id: str, ctl: AdminDashboardController = Depends(get_dashboard)):
    result = ctl.publish_course(course_id)
    raise_for_failure(result)
    return serialize_course(result.value, include_answers=True)


# ------------------------------------------------------------------
# Badges
# ------------------------------------------------------------------
@router.post("/badges", status_code=status.HTTP_201_CREATED)
def create_badge(body: BadgeDraftBody, ctl: AdminDashboardController = Depends(get_dashboard)):
    started = ctl.start_badge_draft()
    raise_for_failure(started)
    replayed = _replay_badge(started.value, body)
    raise_for_failure(replayed)
    if body.publish:
        result = ctl.create_and_publish_badge(replayed.value)
    else:
        result = ctl.create_badge(replayed.value)
    raise_for_failure(result)
    return serialize_badge(result.value)


@router.post("/badges/{badge_id}/publish")
def publish_badge(badge_id: str, ctl: AdminDashboardController = Depends(get_dashboard)):
    result = ctl.publish_badge(badge_id)
    raise_for_failure(result)
    return serialize_badge(result.value)


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------
@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_account(body: AccountBody, ctl: AdminDashboardController = Depends(get_dashboard)):
    result = ctl.create_account(body.email, body.password, body.display_name, body.role)
    raise_for_failure(result)
    return serialize_user(result.value)
