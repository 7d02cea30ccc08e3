"""Shared fixtures: every test session gets its own throwaway SQLite file."""
import os
import tempfile

# Must be set before academy.core.config is imported anywhere
os.environ["DATABASE_PATH"] = os.path.join(tempfile.mkdtemp(prefix="fha-tests-"), "app.db")
os.environ["DEFAULT_ADMIN_EMAIL"] = "superadmin@example.com"
os.environ["DEFAULT_ADMIN_PASSWORD"] = "admin"

import pytest  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def database():
    from academy.persistence.db import init_db
    init_db()
