"""Learner API — published course catalog, lesson progress and badges."""
from __future__ import annotations
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from academy.api.auth import get_current_user
from academy.api.errors import raise_for_failure
from academy.application.learning_app_service import LearningAppService
from academy.container import get_learning_app_service
from academy.domain.badge.models import Badge
from academy.domain.course.models import ContentKind, Course, Lesson
from academy.domain.user.models import CurrentUser, UserProgress

router = APIRouter(tags=["courses"])


# ------------------------------------------------------------------
# Serializers
# ------------------------------------------------------------------
def serialize_lesson(lesson: Lesson, include_answers: bool = False) -> dict:
    data = {
        "id": lesson.id,
        "order": lesson.order,
        "title": lesson.title,
        "kind": lesson.kind.value,
        "body": lesson.body,
        "required": lesson.required,
    }
    if lesson.kind is ContentKind.VIDEO:
        data["video_url"] = lesson.video_url
    if lesson.kind is ContentKind.QUIZ:
        questions = [asdict(q) for q in lesson.questions]
        if not include_answers:
            for q in questions:
                q.pop("correct_answer")
        data["questions"] = questions
    return data


def serialize_course(course: Course, include_lessons: bool = True, include_answers: bool = False) -> dict:
    data = {
        "id": course.id,
        "slug": course.slug,
        "title": course.title,
        "description": course.description,
        "order": course.order,
        "status": course.status.value,
        "estimated_duration": course.estimated_duration,
        "created_by": course.created_by,
        "created_at": course.created_at,
        "lesson_count": len(course.lessons),
    }
    if include_lessons:
        data["lessons"] = [serialize_lesson(lesson, include_answers) for lesson in course.lessons]
    return data


def serialize_badge(badge: Badge) -> dict:
    return {
        "id": badge.id,
        "key": badge.key,
        "title": badge.title,
        "description": badge.description,
        "icon": badge.icon,
        "color": badge.color,
        "status": badge.status.value,
        "course_ids": badge.course_ids,
        "students_earned": badge.students_earned,
        "created_by": badge.created_by,
        "created_at": badge.created_at,
    }


def _serialize_progress(p: UserProgress) -> dict:
    return {
        "course_id": p.course_id,
        "completed_lesson_ids": p.completed_lesson_ids,
        "is_course_completed": p.is_course_completed,
        "last_updated": p.last_updated,
    }


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health")
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Catalog
# ------------------------------------------------------------------
@router.get("/courses")
def list_courses(svc: LearningAppService = Depends(get_learning_app_service)):
    return [serialize_course(c, include_lessons=False) for c in svc.list_courses()]


@router.get("/courses/{slug}")
def get_course(slug: str, svc: LearningAppService = Depends(get_learning_app_service)):
    course = svc.get_course(slug)
    if not course:
        raise HTTPException(status_code=404, detail=f"Course '{slug}' not found")
    return serialize_course(course)


@router.get("/badges")
def list_badges(svc: LearningAppService = Depends(get_learning_app_service)):
    return [serialize_badge(b) for b in svc.list_badges()]


# ------------------------------------------------------------------
# Progress
# ------------------------------------------------------------------
@router.post("/courses/{course_id}/lessons/{lesson_id}/complete")
def complete_lesson(
    course_id: str,
    lesson_id: str,
    svc: LearningAppService = Depends(get_learning_app_service),
    current_user: CurrentUser = Depends(get_current_user),
):
    result = svc.complete_lesson(current_user.id, course_id, lesson_id)
    raise_for_failure(result)
    return _serialize_progress(result.value)


@router.get("/progress")
def my_progress(
    svc: LearningAppService = Depends(get_learning_app_service),
    current_user: CurrentUser = Depends(get_current_user),
):
    summary = svc.summary_for(current_user.id)
    return {
        "summary": asdict(summary),
        "courses": [_serialize_progress(p) for p in svc.progress_for(current_user.id)],
    }


@router.get("/me/badges")
def my_badges(
    svc: LearningAppService = Depends(get_learning_app_service),
    current_user: CurrentUser = Depends(get_current_user),
):
    return [serialize_badge(b) for b in svc.badges_for(current_user.id)]
