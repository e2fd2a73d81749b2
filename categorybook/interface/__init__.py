"""Mini README: Interactive interfaces for categorybook.

Exports the FastAPI application factory that presents the category store.
The Typer launcher in ``main_categorybook.py`` serves it with uvicorn.
"""

from .web_app import create_application

__all__ = ["create_application"]
