"""SQLite implementation of CourseRepository."""
from __future__ import annotations
import json
import sqlite3
from dataclasses import asdict
from typing import List, Optional

from academy.domain.course.models import ContentKind, Course, CourseStatus, Lesson, QuizQuestion
from academy.persistence.db import get_connection
from academy.persistence.interfaces.course_repository import CourseRepository


def _row_to_lesson(row) -> Lesson:
    return Lesson(
        id=row["id"],
        course_id=row["course_id"],
        order=row["sort_order"],
        title=row["title"],
        kind=ContentKind(row["kind"]),
        body=row["body"],
        video_url=row["video_url"],
        questions=[QuizQuestion(**q) for q in json.loads(row["questions"] or "[]")],
        required=bool(row["required"]),
    )


def _row_to_course(row, lessons: List[Lesson]) -> Course:
    return Course(
        id=row["id"],
        slug=row["slug"],
        title=row["title"],
        description=row["description"],
        status=CourseStatus(row["status"]),
        created_by=row["created_by"],
        created_at=row["created_at"],
        order=row["sort_order"],
        estimated_duration=row["estimated_duration"],
        lessons=lessons,
    )


class SqliteCourseRepository(CourseRepository):

    def _load(self, conn, row) -> Course:
        lesson_rows = conn.execute(
            "SELECT * FROM lessons WHERE course_id = ? ORDER BY sort_order ASC",
            (row["id"],),
        ).fetchall()
        return _row_to_course(row, [_row_to_lesson(r) for r in lesson_rows])

    def save_course(self, course: Course) -> bool:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO courses (
                    id, slug, title, description, sort_order, status,
                    estimated_duration, created_by, created_at
                ) VALUES (
                    :id, :slug, :title, :description, :sort_order, :status,
                    :estimated_duration, :created_by, :created_at
                )
                """,
                {
                    "id": course.id,
                    "slug": course.slug,
                    "title": course.title,
                    "description": course.description,
                    "sort_order": course.order,
                    "status": course.status.value,
                    "estimated_duration": course.estimated_duration,
                    "created_by": course.created_by,
                    "created_at": course.created_at,
                },
            )
            conn.execute("DELETE FROM lessons WHERE course_id = ?", (course.id,))
            conn.executemany(
                """
                INSERT INTO lessons (id, course_id, sort_order, title, kind, body, video_url, questions, required)
                VALUES (:id, :course_id, :sort_order, :title, :kind, :body, :video_url, :questions, :required)
                """,
                [
                    {
                        "id": lesson.id,
                        "course_id": course.id,
                        "sort_order": lesson.order,
                        "title": lesson.title,
                        "kind": lesson.kind.value,
                        "body": lesson.body,
                        "video_url": lesson.video_url,
                        "questions": json.dumps([asdict(q) for q in lesson.questions]),
                        "required": int(lesson.required),
                    }
                    for lesson in course.lessons
                ],
            )
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            # UNIQUE(slug) taken by a concurrent insert
            return False
        finally:
            conn.close()

    def get_by_id(self, course_id: str) -> Optional[Course]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM courses WHERE id = ?", (course_id,)).fetchone()
            return self._load(conn, row) if row else None
        finally:
            conn.close()

    def get_by_slug(self, slug: str) -> Optional[Course]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM courses WHERE slug = ?", (slug,)).fetchone()
            return self._load(conn, row) if row else None
        finally:
            conn.close()

    def list_all(self, status: Optional[CourseStatus] = None) -> List[Course]:
        conn = get_connection()
        try:
            if status is None:
                rows = conn.execute("SELECT * FROM courses ORDER BY sort_order ASC, created_at ASC").fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM courses WHERE status = ? ORDER BY sort_order ASC, created_at ASC",
                    (status.value,),
                ).fetchall()
            return [self._load(conn, r) for r in rows]
        finally:
            conn.close()

    def set_status(self, course_id: str, status: CourseStatus) -> bool:
        conn = get_connection()
        try:
            cur = conn.execute("UPDATE courses SET status = ? WHERE id = ?", (status.value, course_id))
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()

    def next_order(self) -> int:
        conn = get_connection()
        try:
            row = conn.execute("SELECT MAX(sort_order) FROM courses").fetchone()
            return (row[0] + 1) if row and row[0] is not None else 0
        finally:
            conn.close()
