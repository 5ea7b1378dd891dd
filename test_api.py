#!/usr/bin/env python3
"""
Simple smoke script to verify the backend API endpoints
Run this after starting the backend server
"""

import os
import time

import requests

BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000")


def test_endpoints():
    """Walk through register, login and the task lifecycle"""

    print("Testing Task Board API endpoints...")
    print("=" * 50)

    username = f"smoke-{int(time.time())}"
    password = "smoke-password"

    # Test root endpoint
    try:
        response = requests.get(f"{BASE_URL}/")
        print(f"✓ Root endpoint: {response.status_code} - {response.json()}")
    except Exception as e:
        print(f"✗ Root endpoint failed: {e}")
        return

    # Test health endpoint
    try:
        response = requests.get(f"{BASE_URL}/health")
        print(f"✓ Health endpoint: {response.status_code} - {response.json()}")
    except Exception as e:
        print(f"✗ Health endpoint failed: {e}")

    # Gate check without a token
    response = requests.get(f"{BASE_URL}/api/tasks")
    print(f"✓ Tasks without token: {response.status_code} (expected 401)")

    # Register and log in
    response = requests.post(f"{BASE_URL}/api/register", json={"username": username, "password": password})
    print(f"✓ Register endpoint: {response.status_code}")

    response = requests.post(f"{BASE_URL}/api/login", json={"username": username, "password": password})
    print(f"✓ Login endpoint: {response.status_code}")
    if response.status_code != 200:
        print(f"  Response: {response.text}")
        return
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    # Task lifecycle
    task = {"taskName": "Smoke test task", "assignees": username, "dueDate": "2030-01-01", "taskType": "smoke"}
    response = requests.post(f"{BASE_URL}/api/tasks", json=task, headers=headers)
    print(f"✓ Create task endpoint: {response.status_code}")
    if response.status_code != 201:
        print(f"  Response: {response.text}")
        return
    task_id = response.json()["id"]

    response = requests.put(
        f"{BASE_URL}/api/tasks/{task_id}/assignee",
        json={"assigneeName": username, "completed": True},
        headers=headers,
    )
    print(f"✓ Assignee progress endpoint: {response.status_code}")

    response = requests.get(f"{BASE_URL}/api/tasks/search", params={"q": "smoke", "type": "smoke"}, headers=headers)
    print(f"✓ Search endpoint: {response.status_code} - {len(response.json())} tasks")

    response = requests.delete(f"{BASE_URL}/api/tasks/{task_id}", headers=headers)
    print(f"✓ Delete task endpoint: {response.status_code} - isDeleted={response.json().get('isDeleted')}")

    print("\n" + "=" * 50)
    print("API testing completed!")


if __name__ == "__main__":
    test_endpoints()
