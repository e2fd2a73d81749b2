"""Mini README: FastAPI interface presenting the category store.

Structure:
    * create_application - application factory wiring routes to a store.
    * Payload helpers - turn categories and entries into JSON bodies.

This is the presentation collaborator: it reads store state, invokes one
store mutation per request, and explicitly saves after every mutation. The
application lifespan performs one more unconditional save on shutdown, the
same flush a mobile client would do when sent to the background. Entries are
always addressed by id in responses so entries sharing a name stay distinct.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from ..configuration import get_settings
from ..finance import Category, SortOption, build_entry, sorted_entries, summarise
from ..logging_utils import get_logger
from ..store import CategoryNotFoundError, DataStore, open_store

LOGGER = get_logger(__name__)


def _category_summary(category: Category, position: int) -> Dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "position": position,
        "entry_count": len(category.entries),
        **summarise(category),
    }


def _category_detail(category: Category, sort: SortOption) -> Dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "sort": sort.value,
        "entries": [entry.as_dict() for entry in sorted_entries(category.entries, sort)],
        **summarise(category),
    }


def create_application(store: Optional[DataStore] = None) -> FastAPI:
    """Create the FastAPI application bound to ``store`` (or the configured one)."""

    data_store = store if store is not None else open_store(get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        result = data_store.save()
        LOGGER.info("Shutdown flush finished ok=%s", result.ok)

    app = FastAPI(title="categorybook", version="0.1.0", lifespan=lifespan)
    app.state.store = data_store

    def persist() -> Dict[str, object]:
        result = data_store.save()
        payload: Dict[str, object] = {"saved": result.ok}
        if not result.ok:
            payload["save_error"] = result.failure.value
        return payload

    def lookup(category_id: str) -> Category:
        try:
            return data_store.get_category(category_id)
        except CategoryNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error

    def category_list() -> List[Dict[str, object]]:
        return [
            _category_summary(category, position)
            for position, category in enumerate(data_store.categories)
        ]

    @app.get("/categories")
    async def list_categories() -> JSONResponse:
        """Return every category in user order with its totals."""

        categories = category_list()
        LOGGER.debug("Returning %s categories", len(categories))
        return JSONResponse({"categories": categories})

    @app.post("/categories")
    async def add_category(name: str = Form(...)) -> JSONResponse:
        """Append a category with the submitted name."""

        category = data_store.add_category(name)
        LOGGER.info("Category %s created", category.id)
        return JSONResponse(
            {"category": _category_summary(category, len(data_store) - 1), **persist()},
            status_code=201,
        )

    @app.post("/categories/delete")
    async def delete_categories(positions: List[int] = Form(...)) -> JSONResponse:
        """Remove the categories at the selected list positions."""

        try:
            removed = data_store.remove_categories(positions)
        except IndexError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(
            {
                "removed": [category.id for category in removed],
                "categories": category_list(),
                **persist(),
            }
        )

    @app.post("/categories/move")
    async def move_categories(
        sources: List[int] = Form(...),
        destination: int = Form(...),
    ) -> JSONResponse:
        """Reorder categories by moving the selected positions to ``destination``."""

        try:
            data_store.move_categories(sources, destination)
        except IndexError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({"categories": category_list(), **persist()})

    @app.get("/categories/{category_id}")
    async def category_detail(category_id: str, sort: str = SortOption.NAME.value) -> JSONResponse:
        """Return one category with entries sorted for display; ``sort`` ignores case."""

        category = lookup(category_id)
        try:
            option = SortOption.from_str(sort)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(_category_detail(category, option))

    @app.post("/categories/{category_id}/entries")
    async def add_entry(
        category_id: str,
        name: str = Form(""),
        income: str = Form(""),
        expense: str = Form(""),
        occurred_on: Optional[date] = Form(None, alias="date"),
    ) -> JSONResponse:
        """Add an entry from form text; unparseable amounts add nothing."""

        category = lookup(category_id)
        entry = build_entry(name, income, expense, occurred_on or date.today())
        if entry is None:
            return JSONResponse({"added": False, "category": _category_detail(category, SortOption.NAME)})

        category = data_store.add_entry(category_id, entry)
        LOGGER.info("Entry %s added to category %s", entry.id, category_id)
        return JSONResponse(
            {
                "added": True,
                "entry": entry.as_dict(),
                "category": _category_detail(category, SortOption.NAME),
                **persist(),
            },
            status_code=201,
        )

    @app.post("/categories/{category_id}/entries/delete")
    async def delete_entries(category_id: str, entry_ids: List[str] = Form(...)) -> JSONResponse:
        """Remove the selected entries, addressed by id rather than display position."""

        lookup(category_id)
        try:
            positions = data_store.entry_positions(category_id, entry_ids)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error.args[0])) from error
        removed = data_store.remove_entries(category_id, positions)
        return JSONResponse(
            {
                "removed": [entry.id for entry in removed],
                "category": _category_detail(data_store.get_category(category_id), SortOption.NAME),
                **persist(),
            }
        )

    return app
