"""SQLite implementations of UserRepository and ProgressRepository."""
from __future__ import annotations
import json
import sqlite3
from typing import List, Optional

from academy.domain.access.policy import Role
from academy.domain.user.models import User, UserProgress
from academy.persistence.db import get_connection
from academy.persistence.interfaces.user_repository import ProgressRepository, UserRepository


def _row_to_user(row) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        display_name=row["display_name"],
        role=Role(row["role"]),
        created_at=row["created_at"],
        password_hash=row["password_hash"],
    )


def _row_to_progress(row) -> UserProgress:
    return UserProgress(
        id=row["id"],
        user_id=row["user_id"],
        course_id=row["course_id"],
        completed_lesson_ids=json.loads(row["completed_lesson_ids"] or "[]"),
        is_course_completed=bool(row["is_course_completed"]),
        last_updated=row["last_updated"],
    )


class SqliteUserRepository(UserRepository):

    def save_user(self, user: User) -> bool:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO users (id, email, password_hash, display_name, role, created_at)
                VALUES (:id, :email, :password_hash, :display_name, :role, :created_at)
                """,
                {
                    "id": user.id,
                    "email": user.email,
                    "password_hash": user.password_hash,
                    "display_name": user.display_name,
                    "role": user.role.value,
                    "created_at": user.created_at,
                },
            )
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            # UNIQUE(email) taken by a concurrent insert
            return False
        finally:
            conn.close()

    def get_by_id(self, user_id: str) -> Optional[User]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    def get_by_email(self, email: str) -> Optional[User]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE email = ? COLLATE NOCASE", (email,)).fetchone()
            return _row_to_user(row) if row else None
        finally:
            conn.close()

    def list_all(self) -> List[User]:
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM users ORDER BY created_at ASC").fetchall()
            return [_row_to_user(r) for r in rows]
        finally:
            conn.close()


class SqliteProgressRepository(ProgressRepository):

    def get(self, user_id: str, course_id: str) -> Optional[UserProgress]:
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT * FROM user_progress WHERE user_id = ? AND course_id = ?",
                (user_id, course_id),
            ).fetchone()
            return _row_to_progress(row) if row else None
        finally:
            conn.close()

    def save(self, progress: UserProgress) -> None:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO user_progress (
                    id, user_id, course_id, completed_lesson_ids, is_course_completed, last_updated
                ) VALUES (
                    :id, :user_id, :course_id, :completed_lesson_ids, :is_course_completed, :last_updated
                )
                ON CONFLICT(user_id, course_id) DO UPDATE SET
                    completed_lesson_ids = excluded.completed_lesson_ids,
                    is_course_completed  = excluded.is_course_completed,
                    last_updated         = excluded.last_updated
                """,
                {
                    "id": progress.id,
                    "user_id": progress.user_id,
                    "course_id": progress.course_id,
                    "completed_lesson_ids": json.dumps(progress.completed_lesson_ids),
                    "is_course_completed": int(progress.is_course_completed),
                    "last_updated": progress.last_updated,
                },
            )
            conn.commit()
        finally:
            conn.close()

    def list_for_user(self, user_id: str) -> List[UserProgress]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM user_progress WHERE user_id = ? ORDER BY last_updated ASC",
                (user_id,),
            ).fetchall()
            return [_row_to_progress(r) for r in rows]
        finally:
            conn.close()
