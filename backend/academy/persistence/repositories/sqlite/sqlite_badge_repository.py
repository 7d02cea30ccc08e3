"""SQLite implementation of BadgeRepository."""
from __future__ import annotations
import sqlite3
from typing import List, Optional

from academy.domain.badge.models import Badge
from academy.domain.course.models import CourseStatus
from academy.domain.user.models import UserBadge
from academy.persistence.db import get_connection
from academy.persistence.interfaces.badge_repository import BadgeRepository

_SELECT_BADGE = """
    SELECT b.*,
           (SELECT COUNT(*) FROM user_badges ub WHERE ub.badge_id = b.id) AS students_earned
    FROM badges b
"""


def _row_to_badge(row, course_ids: List[str]) -> Badge:
    return Badge(
        id=row["id"],
        key=row["key"],
        title=row["title"],
        description=row["description"],
        icon=row["icon"],
        color=row["color"],
        status=CourseStatus(row["status"]),
        created_by=row["created_by"],
        created_at=row["created_at"],
        course_ids=course_ids,
        students_earned=row["students_earned"],
    )


class SqliteBadgeRepository(BadgeRepository):

    def _load(self, conn, row) -> Badge:
        course_rows = conn.execute(
            "SELECT course_id FROM badge_courses WHERE badge_id = ? ORDER BY position ASC",
            (row["id"],),
        ).fetchall()
        return _row_to_badge(row, [r["course_id"] for r in course_rows])

    def save_badge(self, badge: Badge) -> bool:
        conn = get_connection()
        try:
            conn.execute(
                """
                INSERT INTO badges (id, key, title, description, icon, color, status, created_by, created_at)
                VALUES (:id, :key, :title, :description, :icon, :color, :status, :created_by, :created_at)
                """,
                {
                    "id": badge.id,
                    "key": badge.key,
                    "title": badge.title,
                    "description": badge.description,
                    "icon": badge.icon,
                    "color": badge.color,
                    "status": badge.status.value,
                    "created_by": badge.created_by,
                    "created_at": badge.created_at,
                },
            )
            conn.executemany(
                "INSERT INTO badge_courses (badge_id, course_id, position) VALUES (?, ?, ?)",
                [(badge.id, course_id, i) for i, course_id in enumerate(badge.course_ids)],
            )
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            # UNIQUE(key) taken by a concurrent insert
            return False
        finally:
            conn.close()

    def get_by_id(self, badge_id: str) -> Optional[Badge]:
        conn = get_connection()
        try:
            row = conn.execute(_SELECT_BADGE + " WHERE b.id = ?", (badge_id,)).fetchone()
            return self._load(conn, row) if row else None
        finally:
            conn.close()

    def get_by_key(self, key: str) -> Optional[Badge]:
        conn = get_connection()
        try:
            row = conn.execute(_SELECT_BADGE + " WHERE b.key = ?", (key,)).fetchone()
            return self._load(conn, row) if row else None
        finally:
            conn.close()

    def list_all(self, status: Optional[CourseStatus] = None) -> List[Badge]:
        conn = get_connection()
        try:
            if status is None:
                rows = conn.execute(_SELECT_BADGE + " ORDER BY b.created_at ASC").fetchall()
            else:
                rows = conn.execute(
                    _SELECT_BADGE + " WHERE b.status = ? ORDER BY b.created_at ASC",
                    (status.value,),
                ).fetchall()
            return [self._load(conn, r) for r in rows]
        finally:
            conn.close()

    def set_status(self, badge_id: str, status: CourseStatus) -> bool:
        conn = get_connection()
        try:
            cur = conn.execute("UPDATE badges SET status = ? WHERE id = ?", (status.value, badge_id))
            conn.commit()
            return cur.rowcount > 0
        finally:
            conn.close()

    def award(self, user_badge: UserBadge) -> bool:
        conn = get_connection()
        try:
            conn.execute(
                "INSERT INTO user_badges (id, user_id, badge_id, awarded_at) VALUES (?, ?, ?, ?)",
                (user_badge.id, user_badge.user_id, user_badge.badge_id, user_badge.awarded_at),
            )
            conn.commit()
            return True
        except sqlite3.IntegrityError:
            # UNIQUE(user_id, badge_id): already earned
            return False
        finally:
            conn.close()

    def list_for_user(self, user_id: str) -> List[Badge]:
        conn = get_connection()
        try:
            rows = conn.execute(
                _SELECT_BADGE
                + " JOIN user_badges mine ON mine.badge_id = b.id"
                + " WHERE mine.user_id = ? ORDER BY mine.awarded_at ASC",
                (user_id,),
            ).fetchall()
            return [self._load(conn, r) for r in rows]
        finally:
            conn.close()
