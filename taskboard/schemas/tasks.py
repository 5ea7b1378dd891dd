from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Tasks travel and are stored with camelCase keys (taskName, dueDate, ...)
camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssigneeProgress(BaseModel):
    model_config = camel_config

    name: str
    completed: bool = False
    completed_at: Optional[str] = None
    comment: Optional[str] = None


class TaskOut(BaseModel):
    model_config = camel_config

    id: int
    task_name: str
    due_date: str
    task_type: Optional[str] = None
    assignees: List[AssigneeProgress] = []
    is_deleted: bool = False


class TaskCreate(BaseModel):
    """Body of create and full update; assignees is a comma separated string.

    Fields are optional here so that a missing value is reported as a 400
    with a readable message instead of a validation error.
    """
    model_config = camel_config

    task_name: Optional[str] = None
    assignees: Optional[str] = None
    due_date: Optional[str] = None
    task_type: Optional[str] = None


TaskUpdate = TaskCreate


class AssigneeProgressUpdate(BaseModel):
    model_config = camel_config

    assignee_name: Optional[str] = None
    completed: Optional[bool] = None
    comment: Optional[str] = None
