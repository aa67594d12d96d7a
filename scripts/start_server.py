#!/usr/bin/env python3
# =============================================================================
# scripts/start_server.py - API Server Entry Point
# =============================================================================
# Starts uvicorn with the host, port and worker count from settings.
#
# Usage:
#   python scripts/start_server.py
#
#   # Or use uvicorn directly
#   uvicorn app.main:app --host 0.0.0.0 --port 8080 --workers 2
#
# Prerequisites:
#   - MongoDB must be reachable at MONGODB_URI
#   - Environment variables may be set in a .env file
# =============================================================================

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import uvicorn

from app.config import get_settings


def main():
    """Start the API server."""
    settings = get_settings()

    print("=" * 60)
    print("UserHub API")
    print("=" * 60)
    print()
    print(f"Serving on http://{settings.API_HOST}:{settings.API_PORT} with {settings.WORKERS} workers")
    print("Press Ctrl+C to stop")
    print()

    # Workers need an import string, not an app object
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        workers=settings.WORKERS,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
