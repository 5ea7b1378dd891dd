"""
Demo data seeding script
Registers demo users and creates a handful of tasks in the JSON documents
"""

import sys
from datetime import date, timedelta

from taskboard.config.settings import Settings
from taskboard.database import Database
from taskboard.schemas.tasks import TaskCreate
from taskboard.services.directory import UserDirectory, get_directory
from taskboard.services.task_repository import TaskRepository
from taskboard.utils.errors import Conflict

DEMO_USERS = [
    {"username": "alice", "password": "password123"},
    {"username": "bob", "password": "password123"},
    {"username": "carol", "password": "password123"},
]

# due dates are offsets from today so the board always shows every highlight
DEMO_TASKS = [
    {"taskName": "Submit expense report", "assignees": "alice,bob", "days": -2, "taskType": "office"},
    {"taskName": "Book meeting room", "assignees": "carol", "days": 0, "taskType": "office"},
    {"taskName": "Order printer toner", "assignees": "bob", "days": 1, "taskType": "office"},
    {"taskName": "Update visitor badges", "assignees": "alice,carol", "days": 3, "taskType": "office"},
    {"taskName": "Quarterly inventory", "assignees": "alice,bob,carol", "days": 14, "taskType": "office"},
    {"taskName": "Renew software licenses", "assignees": "carol", "days": 7, "taskType": "it"},
]


def seed_users(users: UserDirectory):
    print(f"\n{'='*60}")
    print("Seeding users")
    print(f"{'='*60}")

    for user in DEMO_USERS:
        try:
            users.register(user["username"], user["password"])
            print(f"[SUCCESS] Registered {user['username']}")
        except Conflict:
            print(f"[SKIP] {user['username']} already exists")


def seed_tasks(repo: TaskRepository):
    print(f"\n{'='*60}")
    print("Seeding tasks")
    print(f"{'='*60}")

    existing = {task.task_name for task in repo.list(include_deleted=False)}
    for task in DEMO_TASKS:
        if task["taskName"] in existing:
            print(f"[SKIP] {task['taskName']} already exists")
            continue

        created = repo.create(TaskCreate(
            task_name=task["taskName"],
            assignees=task["assignees"],
            due_date=(date.today() + timedelta(days=task["days"])).isoformat(),
            task_type=task["taskType"],
        ))
        print(f"[SUCCESS] Created task {created.id}: {created.task_name}")


def main():
    settings = Settings.from_env()
    db = Database.from_settings(settings)

    print(f"Seeding demo data into {settings.data_dir}")
    seed_users(UserDirectory(db))
    seed_tasks(TaskRepository(db, get_directory(db, settings)))
    print("\nDemo data ready. Log in with any demo user, password 'password123'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
