"""Mini README: JSON codec for the persisted category list.

Structure:
    * BlobEncodeError / BlobDecodeError - typed codec failures.
    * encode_categories - list of categories to a deterministic JSON blob.
    * decode_categories - validated JSON blob back to categories.

The blob is a JSON array of ``{id, name, entries}`` objects whose entries
carry ``{id, name, income, expense, date}`` with ISO dates. There is no
version tag; anything that does not match this shape fails to decode.
Decoding goes through pydantic records so malformed payloads are rejected
before any category object is built.
"""

from __future__ import annotations

import datetime as dt
import json
import math
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from ..finance import Category, Entry


class BlobEncodeError(ValueError):
    """Raised when categories cannot be serialised."""


class BlobDecodeError(ValueError):
    """Raised when a stored blob does not describe a category list."""


class EntryRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    income: float
    expense: float
    date: dt.date

    @field_validator("income", "expense")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("amounts must be finite")
        return value


class CategoryRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    entries: List[EntryRecord]


_CATEGORY_LIST = TypeAdapter(List[CategoryRecord])


def encode_categories(categories: Iterable[Category]) -> bytes:
    """Serialise categories in order; equal inputs always produce equal bytes."""

    payload = [category.as_dict() for category in categories]
    try:
        text = json.dumps(payload, allow_nan=False, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as error:
        raise BlobEncodeError(f"Unable to encode categories: {error}") from error
    return text.encode("utf-8")


def decode_categories(blob: bytes) -> List[Category]:
    """Rebuild categories from a blob, raising ``BlobDecodeError`` when malformed."""

    try:
        records = _CATEGORY_LIST.validate_json(blob)
    except ValidationError as error:
        raise BlobDecodeError(
            f"Stored categories are malformed ({error.error_count()} problems)"
        ) from error

    return [
        Category(
            id=record.id,
            name=record.name,
            entries=[
                Entry(
                    id=entry.id,
                    name=entry.name,
                    income=entry.income,
                    expense=entry.expense,
                    date=entry.date,
                )
                for entry in record.entries
            ],
        )
        for record in records
    ]
