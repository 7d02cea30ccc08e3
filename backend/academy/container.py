"""Dependency injection container — wires implementations to interfaces."""
from __future__ import annotations
from functools import lru_cache

from academy.application.account_app_service import AccountAppService
from academy.application.admin_dashboard import AdminDashboardController
from academy.application.authoring_app_service import AuthoringAppService
from academy.application.learning_app_service import LearningAppService
from academy.domain.user.models import CurrentUser
from academy.persistence.repositories.sqlite.sqlite_badge_repository import SqliteBadgeRepository
from academy.persistence.repositories.sqlite.sqlite_course_repository import SqliteCourseRepository
from academy.persistence.repositories.sqlite.sqlite_user_repository import (
    SqliteProgressRepository,
    SqliteUserRepository,
)


@lru_cache(maxsize=1)
def get_course_repo() -> SqliteCourseRepository:
    return SqliteCourseRepository()


@lru_cache(maxsize=1)
def get_badge_repo() -> SqliteBadgeRepository:
    return SqliteBadgeRepository()


@lru_cache(maxsize=1)
def get_user_repo() -> SqliteUserRepository:
    return SqliteUserRepository()


@lru_cache(maxsize=1)
def get_progress_repo() -> SqliteProgressRepository:
    return SqliteProgressRepository()


@lru_cache(maxsize=1)
def get_account_app_service() -> AccountAppService:
    return AccountAppService(repo=get_user_repo())


@lru_cache(maxsize=1)
def get_authoring_app_service() -> AuthoringAppService:
    return AuthoringAppService(courses=get_course_repo(), badges=get_badge_repo())


@lru_cache(maxsize=1)
def get_learning_app_service() -> LearningAppService:
    return LearningAppService(courses=get_course_repo(), badges=get_badge_repo(), progress=get_progress_repo())


def build_admin_dashboard(current_user: CurrentUser) -> AdminDashboardController:
    """Not cached: the controller is scoped to one caller."""
    return AdminDashboardController(
        current_user,
        authoring=get_authoring_app_service(),
        learning=get_learning_app_service(),
        accounts=get_account_app_service(),
    )
