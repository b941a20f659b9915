"""
Name: ASGI Entrypoint (daily_report.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tests
  - Keep the import path stable: `uvicorn daily_report.main:app`

Notes/Constraints:
  - No configuration or IO should live here
"""

from .api.main import app

__all__ = ["app"]
