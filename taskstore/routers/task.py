from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncEngine
from taskstore.database import get_engine
from taskstore.core.errors import TaskNotFoundError, EmptyLabelError, NoTasksError
from taskstore.schemas.task import TaskCreate, TaskUpdate, TaskCreated, TaskResponse
from taskstore.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    task_id: int = 0,
    author_id: int = 0,
    engine: AsyncEngine = Depends(get_engine)
):
    return await task_service.list_tasks(engine, task_id=task_id, author_id=author_id)


@router.get("/author/{author_id}", response_model=list[TaskResponse])
async def list_tasks_by_author(
    author_id: int,
    engine: AsyncEngine = Depends(get_engine)
):
    return await task_service.list_tasks_by_author(engine, author_id)


@router.get("/label", response_model=list[TaskResponse])
async def list_tasks_by_label(
    label: str,
    engine: AsyncEngine = Depends(get_engine)
):
    try:
        return await task_service.list_tasks_by_label(engine, label)
    except EmptyLabelError as e:
        raise HTTPException(400, str(e))


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    engine: AsyncEngine = Depends(get_engine)
):
    try:
        return await task_service.get_task(engine, task_id)
    except TaskNotFoundError:
        raise HTTPException(404, "Task not found")


@router.post("", response_model=TaskCreated, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    engine: AsyncEngine = Depends(get_engine)
):
    task_id = await task_service.create_task(engine, task_in)
    return TaskCreated(id=task_id)


@router.post("/batch", status_code=status.HTTP_201_CREATED)
async def create_tasks(
    tasks_in: list[TaskCreate],
    engine: AsyncEngine = Depends(get_engine)
):
    try:
        await task_service.create_tasks(engine, tasks_in)
    except NoTasksError as e:
        raise HTTPException(400, str(e))
    return {"created": len(tasks_in)}


@router.post("/{task_id}/labels/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
async def label_task(
    task_id: int,
    label_id: int,
    engine: AsyncEngine = Depends(get_engine)
):
    try:
        await task_service.label_task(engine, task_id, label_id)
    except sa_exc.IntegrityError:
        raise HTTPException(400, "Task or label not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task_in: TaskUpdate,
    engine: AsyncEngine = Depends(get_engine)
):
    # the store ignores unknown ids; the read below turns them into a 404
    try:
        await task_service.update_task(engine, task_id, **task_in.model_dump())
    except sa_exc.IntegrityError:
        raise HTTPException(400, "Assigned user not found")
    try:
        return await task_service.get_task(engine, task_id)
    except TaskNotFoundError:
        raise HTTPException(404, "Task not found")


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    engine: AsyncEngine = Depends(get_engine)
):
    await task_service.delete_task(engine, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
