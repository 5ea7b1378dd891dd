# taskboard/services/directory.py
"""
Assignee directories.

Depending on the configured assignee policy, the names that may appear on a
task come either from the registered users (``users.json``) or from a free
text list of labels (``assignees.json``) that grows as tasks mention new
names. Both directories expose the same operations so the task repository and
the routers never need to know which one is active.
"""

import logging
from typing import Iterable, List, Optional

from taskboard.database import Database
from taskboard.utils.errors import BadRequest, Conflict, NotFound
from taskboard.utils.security import hash_password

logger = logging.getLogger(__name__)


class AssigneeDirectory:
    """Free text assignee names kept in ``assignees.json``"""

    def __init__(self, db: Database):
        self.db = db

    def list(self) -> List[str]:
        return list(self.db.assignees.read())

    def add(self, name: Optional[str], password: Optional[str] = None) -> str:
        if not name:
            raise BadRequest("Assignee name is required.")

        with self.db.transaction():
            assignees = self.db.assignees.read()
            if name in assignees:
                raise Conflict("Assignee already exists.")
            assignees.append(name)
            self.db.assignees.write(assignees)

        logger.info(f"Assignee '{name}' added")
        return name

    def remove(self, name: str):
        with self.db.transaction():
            assignees = self.db.assignees.read()
            remaining = [a for a in assignees if a != name]
            if len(remaining) == len(assignees):
                raise NotFound("Assignee not found.")
            self.db.assignees.write(remaining)

        logger.info(f"Assignee '{name}' removed")

    def missing(self, names: Iterable[str]) -> List[str]:
        return []

    def register_unknown(self, names: Iterable[str]) -> List[str]:
        """Append every name not yet known; returns the names that were added"""
        with self.db.transaction():
            assignees = self.db.assignees.read()
            added = [name for name in names if name not in assignees]
            if added:
                self.db.assignees.write(assignees + added)

        if added:
            logger.info(f"Auto-registered assignees: {', '.join(added)}")
        return added


class UserDirectory:
    """Registered users from ``users.json``; a username is an assignee name"""

    def __init__(self, db: Database):
        self.db = db

    def list(self) -> List[str]:
        return [user["username"] for user in self.db.users.read()]

    def get(self, username: str) -> Optional[dict]:
        for user in self.db.users.read():
            if user.get("username") == username:
                return user
        return None

    def add(self, name: Optional[str], password: Optional[str] = None) -> str:
        if not name or not password:
            raise BadRequest("Assignee name and password are required.")
        self._create(name, password, conflict_detail="Assignee already exists.")
        return name

    def register(self, username: Optional[str], password: Optional[str]) -> str:
        if not username or not password:
            raise BadRequest("Username and password are required.")
        self._create(username, password, conflict_detail="Username already exists.")
        return username

    def _create(self, username: str, password: str, conflict_detail: str):
        with self.db.transaction():
            users = self.db.users.read()
            if any(user.get("username") == username for user in users):
                raise Conflict(conflict_detail)
            users.append({"username": username, "password": hash_password(password)})
            self.db.users.write(users)

        logger.info(f"User '{username}' registered")

    def remove(self, name: str):
        with self.db.transaction():
            users = self.db.users.read()
            remaining = [user for user in users if user.get("username") != name]
            if len(remaining) == len(users):
                raise NotFound("Assignee not found.")
            self.db.users.write(remaining)

        logger.info(f"User '{name}' removed")

    def missing(self, names: Iterable[str]) -> List[str]:
        known = set(self.list())
        return [name for name in names if name not in known]

    def register_unknown(self, names: Iterable[str]) -> List[str]:
        # users can only be created with a password
        return []


def get_directory(db: Database, settings):
    if settings.requires_registered_assignees:
        return UserDirectory(db)
    return AssigneeDirectory(db)
