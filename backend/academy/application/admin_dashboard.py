"""Admin dashboard controller — role-gated tabs over course and badge authoring."""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from academy.application.account_app_service import AccountAppService
from academy.application.authoring_app_service import AuthoringAppService
from academy.application.learning_app_service import LearningAppService
from academy.domain.access.policy import (
    Capabilities,
    Role,
    can_manage_admins,
    can_manage_content,
    can_view_student_data,
    capabilities_for,
)
from academy.domain.badge.builder import BadgeDraftBuilder
from academy.domain.badge.models import Badge
from academy.domain.common.result import Result, FORBIDDEN, VALIDATION
from academy.domain.course.builder import CourseDraftBuilder
from academy.domain.course.models import Course, CourseStatus
from academy.domain.course.templates import COURSE_TEMPLATES
from academy.domain.user.models import CurrentUser, ProgressSummary, User

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = (
    "You don't have permission to access the admin dashboard. "
    "This area is restricted to administrators only."
)


class Tab(str, Enum):
    USERS = "users"
    COURSES = "courses"
    BADGES = "badges"


# Capability each tab needs, in display order
TAB_REQUIREMENTS: Dict[Tab, Callable[[Role], bool]] = {
    Tab.USERS: can_view_student_data,
    Tab.COURSES: can_manage_content,
    Tab.BADGES: can_manage_content,
}


@dataclass
class DashboardView:
    access_granted: bool
    tabs: List[Tab]
    active_tab: Optional[Tab]
    capabilities: Capabilities
    message: str = ""


@dataclass
class UserRow:
    user: User
    summary: ProgressSummary


@dataclass
class UsersTabView:
    can_manage_admins: bool
    users: List[UserRow] = field(default_factory=list)


@dataclass
class CoursesTabView:
    courses: List[Course] = field(default_factory=list)
    templates: tuple = COURSE_TEMPLATES


@dataclass
class BadgesTabView:
    badges: List[Badge] = field(default_factory=list)
    available_courses: List[Course] = field(default_factory=list)


class AdminDashboardController:
    """
    One controller per request/session, built with the caller's identity.

    The role policy is consulted before anything is shown or changed: a role
    with no dashboard capability gets the access-denied view and every
    operation fails with a `forbidden` result.
    """

    def __init__(
        self,
        current_user: CurrentUser,
        authoring: AuthoringAppService,
        learning: LearningAppService,
        accounts: AccountAppService,
    ):
        self.current_user = current_user
        self.capabilities = capabilities_for(current_user.role)
        self._authoring = authoring
        self._learning = learning
        self._accounts = accounts
        tabs = self.visible_tabs()
        self.active_tab: Optional[Tab] = tabs[0] if tabs else None

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def visible_tabs(self) -> List[Tab]:
        if not self.capabilities.has_any:
            return []
        return [tab for tab, allowed in TAB_REQUIREMENTS.items() if allowed(self.current_user.role)]

    def _require(self, allowed: Callable[[Role], bool], action: str) -> Result[None]:
        if not allowed(self.current_user.role):
            logger.warning(
                "Denied %s for user %s (role %s)",
                action, self.current_user.id, self.current_user.role.value,
            )
            return Result.fail(f"Your role does not allow you to {action}.", code=FORBIDDEN)
        return Result.ok()

    def view(self) -> DashboardView:
        tabs = self.visible_tabs()
        if not tabs:
            return DashboardView(
                access_granted=False,
                tabs=[],
                active_tab=None,
                capabilities=self.capabilities,
                message=ACCESS_DENIED_MESSAGE,
            )
        return DashboardView(
            access_granted=True,
            tabs=tabs,
            active_tab=self.active_tab,
            capabilities=self.capabilities,
        )

    def open_tab(self, tab: Tab) -> Result[DashboardView]:
        try:
            tab = Tab(tab)
        except ValueError:
            return Result.fail(f"'{tab}' is not a dashboard tab.", code=VALIDATION)
        if tab not in self.visible_tabs():
            return Result.fail(f"The {tab.value} tab is not available to your role.", code=FORBIDDEN)
        self.active_tab = tab
        return Result.ok(self.view())

    def tab_view(self, tab: Tab) -> Result[object]:
        opened = self.open_tab(tab)
        if not opened.is_success:
            return opened
        if self.active_tab is Tab.USERS:
            return Result.ok(self._users_tab())
        if self.active_tab is Tab.COURSES:
            return Result.ok(CoursesTabView(courses=self._authoring.list_courses()))
        return Result.ok(BadgesTabView(
            badges=self._authoring.list_badges(),
            available_courses=self._authoring.list_courses(CourseStatus.PUBLISHED),
        ))

    def _users_tab(self) -> UsersTabView:
        rows = [UserRow(user=u, summary=self._learning.summary_for(u.id)) for u in self._accounts.list_users()]
        return UsersTabView(can_manage_admins=self.capabilities.manage_admins, users=rows)

    # ------------------------------------------------------------------
    # Courses tab
    # ------------------------------------------------------------------
    def templates(self) -> Result[tuple]:
        allowed = self._require(can_manage_content, "manage content")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return Result.ok(COURSE_TEMPLATES)

    def start_course_draft(self) -> Result[CourseDraftBuilder]:
        allowed = self._require(can_manage_content, "create courses")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        self.active_tab = Tab.COURSES
        return Result.ok(self._authoring.new_course_draft())

    def save_course(self, builder: CourseDraftBuilder, publish: bool = False) -> Result[Course]:
        allowed = self._require(can_manage_content, "publish courses" if publish else "save courses")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return self._authoring.save_course(builder, author_id=self.current_user.id, publish=publish)

    def cancel_course_draft(self, builder: CourseDraftBuilder) -> Result[None]:
        return builder.discard()

    def publish_course(self, course_id: str) -> Result[Course]:
        allowed = self._require(can_manage_content, "publish courses")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return self._authoring.publish_course(course_id)

    # ------------------------------------------------------------------
    # Badges tab
    # ------------------------------------------------------------------
    def start_badge_draft(self) -> Result[BadgeDraftBuilder]:
        allowed = self._require(can_manage_content, "create badges")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        self.active_tab = Tab.BADGES
        return Result.ok(self._authoring.new_badge_draft())

    def create_badge(self, builder: BadgeDraftBuilder) -> Result[Badge]:
        allowed = self._require(can_manage_content, "create badges")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return self._authoring.save_badge(builder, author_id=self.current_user.id, publish=False)

    def create_and_publish_badge(self, builder: BadgeDraftBuilder) -> Result[Badge]:
        allowed = self._require(can_manage_content, "publish badges")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return self._authoring.save_badge(builder, author_id=self.current_user.id, publish=True)

    def cancel_badge_draft(self, builder: BadgeDraftBuilder) -> Result[None]:
        return builder.discard()

    def publish_badge(self, badge_id: str) -> Result[Badge]:
        allowed = self._require(can_manage_content, "publish badges")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return self._authoring.publish_badge(badge_id)

    # ------------------------------------------------------------------
    # Users tab
    # ------------------------------------------------------------------
    def create_account(self, email: str, password: str, display_name: str, role: Role) -> Result[User]:
        """Staff accounts need can_manage_admins; students may be added by anyone with the users tab."""
        role = Role(role)
        check = can_view_student_data if role is Role.STUDENT else can_manage_admins
        allowed = self._require(check, f"create {role.value} accounts")
        if not allowed.is_success:
            return Result.from_failure(allowed)
        return self._accounts.create_user(email, password, display_name, role)
