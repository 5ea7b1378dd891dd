# taskboard/services/task_repository.py
import logging
import time
from datetime import datetime, timezone
from typing import List, Optional

from taskboard.database import Database
from taskboard.schemas.tasks import AssigneeProgress, TaskCreate, TaskOut
from taskboard.utils.errors import BadRequest, NotFound

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Task name, assignees, due date, and task type are required."


def split_assignee_names(assignees: str) -> List[str]:
    """Split "Alice, Bob,,Alice" into ["Alice", "Bob"]"""
    names = []
    for name in assignees.split(","):
        name = name.strip()
        if name and name not in names:
            names.append(name)
    return names


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _to_record(task: TaskOut) -> dict:
    record = task.model_dump(by_alias=True)
    for assignee in record["assignees"]:
        if assignee.get("comment") is None:
            assignee.pop("comment", None)
    return record


class TaskRepository:
    """CRUD over the tasks document.

    Every mutation reads the whole collection, changes it in memory and
    writes it back inside ``Database.transaction()``. ``directory`` is the
    active assignee directory (see ``taskboard.services.directory``).
    """

    def __init__(self, db: Database, directory):
        self.db = db
        self.directory = directory

    def _load(self) -> List[TaskOut]:
        return [TaskOut.model_validate(record) for record in self.db.tasks.read()]

    def _save(self, tasks: List[TaskOut]):
        self.db.tasks.write([_to_record(task) for task in tasks])

    @staticmethod
    def _find(tasks: List[TaskOut], task_id: int) -> TaskOut:
        for task in tasks:
            if task.id == task_id:
                return task
        raise NotFound("Task not found.")

    def list(self, task_type: Optional[str] = None, include_deleted: bool = False) -> List[TaskOut]:
        tasks = [task for task in self._load() if task.is_deleted == include_deleted]
        if task_type:
            tasks = [task for task in tasks if task.task_type == task_type]
        return tasks

    def search(self, query: Optional[str], task_type: Optional[str] = None) -> List[TaskOut]:
        tasks = self._load()
        if task_type:
            tasks = [task for task in tasks if task.task_type == task_type]
        query = (query or "").strip().lower()
        if not query:
            return tasks

        return [
            task for task in tasks
            if query in task.task_name.lower()
            or any(query in assignee.name.lower() for assignee in task.assignees)
        ]

    def _resolve_assignees(self, data: TaskCreate) -> List[str]:
        if not (data.task_name and data.assignees and data.due_date and data.task_type):
            raise BadRequest(REQUIRED_FIELDS_MESSAGE)

        names = split_assignee_names(data.assignees)
        if not names:
            raise BadRequest(REQUIRED_FIELDS_MESSAGE)

        unknown = self.directory.missing(names)
        if unknown:
            raise BadRequest(f"The following assignees are not registered users: {', '.join(unknown)}")

        self.directory.register_unknown(names)
        return names

    def create(self, data: TaskCreate) -> TaskOut:
        with self.db.transaction():
            names = self._resolve_assignees(data)
            tasks = self._load()

            # creation time in ms, bumped past the newest id if the clock repeats
            task_id = int(time.time() * 1000)
            if tasks:
                task_id = max(task_id, max(task.id for task in tasks) + 1)

            task = TaskOut(
                id=task_id,
                task_name=data.task_name,
                due_date=data.due_date,
                task_type=data.task_type,
                assignees=[AssigneeProgress(name=name) for name in names],
                is_deleted=False,
            )
            tasks.append(task)
            self._save(tasks)

        logger.info(f"Task {task.id} created: '{task.task_name}' for {', '.join(names)}")
        return task

    def update(self, task_id: int, data: TaskCreate) -> TaskOut:
        with self.db.transaction():
            tasks = self._load()
            task = self._find(tasks, task_id)
            names = self._resolve_assignees(data)

            existing = {assignee.name: assignee for assignee in task.assignees}
            task.assignees = [existing.get(name) or AssigneeProgress(name=name) for name in names]
            task.task_name = data.task_name
            task.due_date = data.due_date
            task.task_type = data.task_type
            self._save(tasks)

        logger.info(f"Task {task.id} updated")
        return task

    def _find_assignee(self, task: TaskOut, assignee_name: str) -> AssigneeProgress:
        for assignee in task.assignees:
            if assignee.name == assignee_name:
                return assignee
        raise NotFound("Assignee not found.")

    def set_assignee_progress(
        self,
        task_id: int,
        assignee_name: Optional[str],
        completed: Optional[bool],
        comment: Optional[str] = None,
    ) -> TaskOut:
        with self.db.transaction():
            tasks = self._load()
            task = self._find(tasks, task_id)

            if not assignee_name or completed is None:
                raise BadRequest("Assignee name and completed flag are required.")

            assignee = self._find_assignee(task, assignee_name)
            assignee.completed = completed
            assignee.completed_at = utc_timestamp() if completed else None

            if comment is not None:
                assignee.comment = comment
            self._save(tasks)

        logger.info(f"Task {task.id}: '{assignee_name}' marked {'completed' if completed else 'not completed'}")
        return task

    def set_assignee_comment(self, task_id: int, assignee_name: Optional[str], comment: str) -> TaskOut:
        """Replace an assignee's comment; completion state is left alone"""
        with self.db.transaction():
            tasks = self._load()
            task = self._find(tasks, task_id)

            if not assignee_name:
                raise BadRequest("Assignee name is required.")

            assignee = self._find_assignee(task, assignee_name)
            assignee.comment = comment
            self._save(tasks)

        logger.info(f"Task {task.id}: comment of '{assignee_name}' updated")
        return task

    def soft_delete(self, task_id: int) -> TaskOut:
        with self.db.transaction():
            tasks = self._load()
            task = self._find(tasks, task_id)
            task.is_deleted = True
            self._save(tasks)

        logger.info(f"Task {task.id} soft-deleted")
        return task
