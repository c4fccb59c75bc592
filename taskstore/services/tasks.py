import logging
from typing import Iterable, Optional
from sqlalchemy import select, insert, update, delete, or_, func, literal
from sqlalchemy import Integer, BigInteger, Text
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncEngine
from taskstore.core.errors import TaskNotFoundError, EmptyLabelError, NoTasksError
from taskstore.models.label import Label
from taskstore.models.task import Task, tasks_labels
from taskstore.schemas.task import TaskCreate, TaskResponse

logger = logging.getLogger(__name__)

tasks_table = Task.__table__
labels_table = Label.__table__


async def _fetch_tasks(engine: AsyncEngine, stmt) -> list[TaskResponse]:
    async with engine.connect() as conn:
        result = await conn.execute(stmt)
        rows = result.all()
    return [TaskResponse(**row._mapping) for row in rows]


async def list_tasks(
    engine: AsyncEngine, task_id: int = 0, author_id: int = 0, ordered: bool = True
) -> list[TaskResponse]:
    """
    All tasks, or only those matching task_id and/or author_id.
    A zero filter matches everything, so one statement serves all three cases.
    """
    task_filter = literal(task_id, Integer)
    author_filter = literal(author_id, Integer)
    stmt = (
        select(tasks_table)
        .where(or_(task_filter == 0, tasks_table.c.id == task_filter))
        .where(or_(author_filter == 0, tasks_table.c.author_id == author_filter))
    )
    if ordered:
        stmt = stmt.order_by(tasks_table.c.id)
    return await _fetch_tasks(engine, stmt)


async def list_all_tasks(engine: AsyncEngine) -> list[TaskResponse]:
    return await list_tasks(engine, ordered=False)


async def get_task(engine: AsyncEngine, task_id: int) -> TaskResponse:
    tasks = await _fetch_tasks(engine, select(tasks_table).where(tasks_table.c.id == task_id))
    if not tasks:
        raise TaskNotFoundError(task_id)
    return tasks[0]


async def list_tasks_by_author(engine: AsyncEngine, author_id: int) -> list[TaskResponse]:
    return await _fetch_tasks(
        engine, select(tasks_table).where(tasks_table.c.author_id == author_id)
    )


async def list_tasks_by_label(engine: AsyncEngine, label: str) -> list[TaskResponse]:
    """Tasks carrying the named label. An unknown label gives an empty list."""
    if label == "":
        raise EmptyLabelError()

    stmt = (
        select(tasks_table)
        .join(tasks_labels, tasks_labels.c.task_id == tasks_table.c.id)
        .join(labels_table, tasks_labels.c.label_id == labels_table.c.id)
        .where(labels_table.c.name == label)
    )
    return await _fetch_tasks(engine, stmt)


async def create_task(engine: AsyncEngine, task: TaskCreate) -> int:
    # author, assignee, opened and closed come from column defaults
    async with engine.begin() as conn:
        result = await conn.execute(
            insert(tasks_table).values(title=task.title, content=task.content)
        )
        task_id = result.inserted_primary_key[0]
    return task_id


async def create_tasks(engine: AsyncEngine, tasks: Iterable[TaskCreate]) -> None:
    """Insert all tasks in one transaction; any failure leaves none of them."""
    rows = [{"title": t.title, "content": t.content} for t in tasks]
    if not rows:
        raise NoTasksError()

    try:
        async with engine.begin() as conn:
            await conn.execute(insert(tasks_table), rows)
    except sa_exc.SQLAlchemyError:
        logger.warning("Batch insert of %d tasks rolled back", len(rows))
        raise


async def update_task(
    engine: AsyncEngine,
    task_id: int,
    assigned_id: Optional[int] = None,
    closed: Optional[int] = None,
    title: Optional[str] = None,
    content: Optional[str] = None,
) -> None:
    """
    Overwrite the columns whose argument is not None, in a single UPDATE.
    0 and "" are real values here: closed=0 reopens a task.
    An unknown task_id updates nothing and is not an error.
    """
    stmt = (
        update(tasks_table)
        .where(tasks_table.c.id == task_id)
        .values(
            assigned_id=func.coalesce(literal(assigned_id, Integer), tasks_table.c.assigned_id),
            closed=func.coalesce(literal(closed, BigInteger), tasks_table.c.closed),
            title=func.coalesce(literal(title, Text), tasks_table.c.title),
            content=func.coalesce(literal(content, Text), tasks_table.c.content),
        )
    )
    async with engine.begin() as conn:
        await conn.execute(stmt)


async def delete_task(engine: AsyncEngine, task_id: int) -> None:
    # label links go first, they reference the task
    async with engine.begin() as conn:
        await conn.execute(delete(tasks_labels).where(tasks_labels.c.task_id == task_id))
        await conn.execute(delete(tasks_table).where(tasks_table.c.id == task_id))


async def label_task(engine: AsyncEngine, task_id: int, label_id: int) -> None:
    async with engine.begin() as conn:
        await conn.execute(insert(tasks_labels).values(task_id=task_id, label_id=label_id))
