# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import insert

from taskstore.config import Settings
from taskstore.database import close, connect, init_schema
from taskstore.models.label import Label
from taskstore.models.task import Task, tasks_labels
from taskstore.models.user import User

# Same rows as db_init/init.sql
USERS = ["John Doe", "Jane Doe", "Bob Smith", "Alice Johnson", "Mike Brown"]
LABELS = ["Bug", "Feature", "Task", "Enhancement", "Documentation"]
TASKS = [
    ("Fix login issue", "The login feature is not working as expected.", 1, 2),
    ("Implement new feature", "Implement a new feature to improve user experience.", 3, 1),
    ("Write documentation", "Write documentation for the new feature.", 4, 5),
    ("Refactor code", "Refactor the code to improve performance.", 4, 3),
    ("Test new feature", "Test the new feature to ensure it works as expected.", 5, 1),
]
TASK_LABELS = [(1, 1), (2, 2), (3, 4), (4, 3), (5, 2), (1, 3), (2, 5)]


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file instead of Postgres."""
    return Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'tasks.sqlite3'}")


@pytest_asyncio.fixture()
async def engine(settings: Settings):
    engine = await connect(settings)
    await init_schema(engine)
    async with engine.begin() as conn:
        await conn.execute(insert(User), [{"name": name} for name in USERS])
        await conn.execute(insert(Label), [{"name": name} for name in LABELS])
        await conn.execute(
            insert(Task),
            [
                {"title": title, "content": content, "author_id": author, "assigned_id": assigned}
                for title, content, author, assigned in TASKS
            ],
        )
        await conn.execute(
            insert(tasks_labels),
            [{"task_id": task_id, "label_id": label_id} for task_id, label_id in TASK_LABELS],
        )
    yield engine
    await close(engine)
