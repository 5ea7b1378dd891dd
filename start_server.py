#!/usr/bin/env python3
"""
Startup script for the Task Board API
This script starts the FastAPI server with proper configuration
"""

import uvicorn

from taskboard.config.settings import Settings


def main():
    settings = Settings.from_env()

    print("Starting Task Board API Server...")
    print(f"Host: {settings.host}")
    print(f"Port: {settings.port}")
    print(f"Reload: {settings.reload}")
    print(f"Data dir: {settings.data_dir}")
    print("=" * 50)

    # Start the server
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
