#!/usr/bin/env python3
"""
Startup script for the Task Board frontend
Serves the browser pages; the API must be reachable at API_BASE_URL
"""

import uvicorn

from taskboard.config.settings import Settings


def main():
    settings = Settings.from_env()

    print("Starting Task Board Frontend...")
    print(f"Host: {settings.host}")
    print(f"Port: {settings.frontend_port}")
    print(f"API: {settings.api_base_url}")
    print("=" * 50)

    uvicorn.run(
        "frontend:app",
        host=settings.host,
        port=settings.frontend_port,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
