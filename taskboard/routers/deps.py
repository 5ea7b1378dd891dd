# taskboard/routers/deps.py
from fastapi import Depends, Request

from taskboard.database import Database, get_db
from taskboard.services.directory import UserDirectory, get_directory
from taskboard.services.task_repository import TaskRepository


def get_assignee_directory(request: Request, db: Database = Depends(get_db)):
    return get_directory(db, request.app.state.settings)


def get_user_directory(db: Database = Depends(get_db)) -> UserDirectory:
    return UserDirectory(db)


def get_task_repository(
    db: Database = Depends(get_db),
    directory=Depends(get_assignee_directory),
) -> TaskRepository:
    return TaskRepository(db, directory)
