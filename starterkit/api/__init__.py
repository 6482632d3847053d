"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from starterkit.api import app

    uvicorn starterkit.api:app --reload
"""

from starterkit.api.app import app, create_app

__all__ = ["app", "create_app"]
