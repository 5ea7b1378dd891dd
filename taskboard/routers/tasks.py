from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from taskboard.routers.deps import get_task_repository
from taskboard.schemas.tasks import AssigneeProgressUpdate, TaskCreate, TaskOut, TaskUpdate
from taskboard.services.task_repository import TaskRepository
from taskboard.utils.auth import get_current_user

router = APIRouter(prefix="/tasks", dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[TaskOut])
def list_tasks(
    task_type: Optional[str] = Query(None, alias="type"),
    deleted: bool = False,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Active tasks by default; ``deleted=true`` lists the soft-deleted ones"""
    return repo.list(task_type=task_type, include_deleted=deleted)


@router.get("/search", response_model=List[TaskOut])
def search_tasks(
    q: Optional[str] = None,
    task_type: Optional[str] = Query(None, alias="type"),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.search(q, task_type=task_type)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, repo: TaskRepository = Depends(get_task_repository)):
    return repo.create(task)


@router.put("/{task_id}/assignee", response_model=TaskOut)
def update_assignee_progress(
    task_id: int,
    progress: AssigneeProgressUpdate,
    repo: TaskRepository = Depends(get_task_repository),
):
    """Completion toggle (stamps completedAt when true), or a comment-only save when ``completed`` is omitted"""
    if progress.completed is None and progress.comment is not None:
        return repo.set_assignee_comment(task_id, progress.assignee_name, progress.comment)
    return repo.set_assignee_progress(task_id, progress.assignee_name, progress.completed, progress.comment)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, task_update: TaskUpdate, repo: TaskRepository = Depends(get_task_repository)):
    return repo.update(task_id, task_update)


@router.delete("/{task_id}", response_model=TaskOut)
def delete_task(task_id: int, repo: TaskRepository = Depends(get_task_repository)):
    """Soft delete: the task is flagged, kept on disk and returned"""
    return repo.soft_delete(task_id)
