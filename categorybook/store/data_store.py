"""Mini README: Authoritative in-memory category store with blob persistence.

Structure:
    * PersistenceOutcome / PersistenceFailure - typed save/load results.
    * PersistenceResult - value returned by ``DataStore.save`` and ``load``.
    * CategoryNotFoundError - raised for unknown category identifiers.
    * DataStore - ordered, observable container exposing mutations and I/O.

The store keeps categories in an id keyed dictionary plus a separate order
list so callers can reach one category by id without recomputing indices.
Mutations never persist on their own; the presentation layer calls ``save``
after each one. Save and load report problems through the module logger and
the returned ``PersistenceResult`` and never raise, and neither of them
leaves the in-memory list half updated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from ..finance import Category, Entry
from ..logging_utils import get_logger
from ..storage import BlobDecodeError, BlobEncodeError, BlobStore, decode_categories, encode_categories

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "categories"

StoreListener = Callable[["DataStore"], None]


class PersistenceOutcome(str, Enum):
    """Successful save/load outcomes."""

    SAVED = "saved"
    LOADED = "loaded"
    MISSING = "missing"


class PersistenceFailure(str, Enum):
    """Reasons a save or load did not complete."""

    ENCODE_FAILED = "encode_failed"
    WRITE_FAILED = "write_failed"
    READ_FAILED = "read_failed"
    DECODE_FAILED = "decode_failed"


@dataclass(frozen=True, slots=True)
class PersistenceResult:
    """Outcome of a persistence call; exactly one of the two fields is set."""

    outcome: Optional[PersistenceOutcome] = None
    failure: Optional[PersistenceFailure] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, outcome: PersistenceOutcome, detail: str = "") -> "PersistenceResult":
        return cls(outcome=outcome, detail=detail)

    @classmethod
    def failed(cls, failure: PersistenceFailure, detail: str) -> "PersistenceResult":
        return cls(failure=failure, detail=detail)


class CategoryNotFoundError(KeyError):
    """Raised when a category identifier is not present in the store."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category {category_id} not found")
        self.category_id = category_id


def _checked_positions(positions: Iterable[int], length: int, label: str) -> List[int]:
    """Return unique positions in ascending order, rejecting out-of-range values."""

    unique = sorted(set(positions))
    for position in unique:
        if not 0 <= position < length:
            raise IndexError(f"{label} position {position} outside 0..{length - 1}")
    return unique


class DataStore:
    """Own the ordered category list and its serialised copy in a blob store."""

    def __init__(
        self,
        blob_store: BlobStore,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        categories: Optional[Iterable[Category]] = None,
    ) -> None:
        self.blob_store = blob_store
        self.key = key
        self._categories: Dict[str, Category] = {}
        self._order: List[str] = []
        self._listeners: List[StoreListener] = []
        self.last_load: Optional[PersistenceResult] = None
        if categories:
            self._replace(list(categories))
        LOGGER.debug(
            "Data store initialised with %s categories on %s key=%s",
            len(self._order),
            blob_store.metadata(),
            key,
        )

    @classmethod
    def open(cls, blob_store: BlobStore, *, key: str = DEFAULT_STORAGE_KEY) -> "DataStore":
        """Construct a store and resolve its initial state with a single ``load``."""

        store = cls(blob_store, key=key)
        store.last_load = store.load()
        return store

    # ----- read access -------------------------------------------------

    @property
    def categories(self) -> List[Category]:
        """Return the categories in user order.

        The list is a fresh container but its items are the stored objects;
        change them only through the store's mutation methods.
        """

        return [self._categories[category_id] for category_id in self._order]

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def get_category(self, category_id: str) -> Category:
        """Retrieve a category, raising ``CategoryNotFoundError`` when missing."""

        try:
            return self._categories[category_id]
        except KeyError:
            raise CategoryNotFoundError(category_id) from None

    def position_of(self, category_id: str) -> int:
        self.get_category(category_id)
        return self._order.index(category_id)

    # ----- observation -------------------------------------------------

    def subscribe(self, listener: StoreListener) -> None:
        """Call ``listener(store)`` after every mutation and successful load."""

        self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ----- mutations ---------------------------------------------------

    def add_category(self, name: str) -> Category:
        """Append a new, empty category. Names are neither trimmed nor deduplicated."""

        category = Category(name=name)
        self._categories[category.id] = category
        self._order.append(category.id)
        LOGGER.debug("Added category %s (%r) at position %s", category.id, name, len(self._order) - 1)
        self._notify()
        return category

    def remove_categories(self, positions: Iterable[int]) -> List[Category]:
        """Remove categories at ``positions`` and return them in list order."""

        checked = _checked_positions(positions, len(self._order), "Category")
        removed_ids = [self._order[position] for position in checked]
        for position in reversed(checked):
            del self._order[position]
        removed = [self._categories.pop(category_id) for category_id in removed_ids]
        LOGGER.debug("Removed %s categories at positions %s", len(removed), checked)
        if removed:
            self._notify()
        return removed

    def move_categories(self, sources: Iterable[int], destination: int) -> None:
        """Move the categories at ``sources`` as one block to ``destination``.

        The sources are extracted first, keeping their relative order, and
        ``destination`` indexes the shortened list, clamped to its end. Moving
        position 0 to 2 in ``[A, B, C, D]`` therefore gives ``[B, C, A, D]``.
        """

        checked = _checked_positions(sources, len(self._order), "Source")
        if destination < 0:
            raise IndexError(f"Destination position {destination} is negative")
        extracted = set(checked)
        moving = [self._order[position] for position in checked]
        remaining = [
            category_id for position, category_id in enumerate(self._order) if position not in extracted
        ]
        target = min(destination, len(remaining))
        self._order = remaining[:target] + moving + remaining[target:]
        LOGGER.debug("Moved categories %s to position %s", checked, target)
        if moving:
            self._notify()

    def update_category(self, category_id: str, mutator: Callable[[Category], None]) -> Category:
        """Apply ``mutator`` to the stored category identified by ``category_id``."""

        category = self.get_category(category_id)
        mutator(category)
        self._notify()
        return category

    def add_entry(self, category_id: str, entry: Entry) -> Category:
        """Append ``entry`` to the category's entries."""

        category = self.update_category(category_id, lambda target: target.entries.append(entry))
        LOGGER.debug("Added entry %s to category %s", entry.id, category_id)
        return category

    def remove_entries(self, category_id: str, positions: Iterable[int]) -> List[Entry]:
        """Remove entries at stored ``positions`` from a category."""

        category = self.get_category(category_id)
        checked = _checked_positions(positions, len(category.entries), "Entry")
        dropped = set(checked)
        removed = [category.entries[position] for position in checked]

        def _drop(target: Category) -> None:
            target.entries[:] = [
                entry for position, entry in enumerate(target.entries) if position not in dropped
            ]

        self.update_category(category_id, _drop)
        LOGGER.debug("Removed %s entries from category %s", len(removed), category_id)
        return removed

    def entry_positions(self, category_id: str, entry_ids: Iterable[str]) -> List[int]:
        """Translate entry ids into stored positions, raising ``KeyError`` for unknown ids."""

        category = self.get_category(category_id)
        index = {entry.id: position for position, entry in enumerate(category.entries)}
        positions = []
        for entry_id in entry_ids:
            if entry_id not in index:
                raise KeyError(f"Entry {entry_id} not found in category {category_id}")
            positions.append(index[entry_id])
        return positions

    # ----- persistence -------------------------------------------------

    def save(self) -> PersistenceResult:
        """Encode every category and overwrite the blob under ``key``."""

        try:
            blob = encode_categories(self.categories)
        except BlobEncodeError as error:
            LOGGER.error("Unable to encode categories for key=%s: %s", self.key, error)
            return PersistenceResult.failed(PersistenceFailure.ENCODE_FAILED, str(error))

        try:
            self.blob_store.write(self.key, blob)
        except Exception as error:
            LOGGER.exception("Unable to write categories to key=%s", self.key)
            return PersistenceResult.failed(PersistenceFailure.WRITE_FAILED, str(error))

        LOGGER.info("Saved %s categories (%s bytes) to key=%s", len(self._order), len(blob), self.key)
        return PersistenceResult.success(PersistenceOutcome.SAVED)

    def load(self) -> PersistenceResult:
        """Replace the in-memory list with the stored blob when it decodes cleanly."""

        try:
            blob = self.blob_store.read(self.key)
        except Exception as error:
            LOGGER.exception("Unable to read categories from key=%s", self.key)
            return PersistenceResult.failed(PersistenceFailure.READ_FAILED, str(error))

        if blob is None:
            LOGGER.info("No stored categories under key=%s; keeping current state", self.key)
            return PersistenceResult.success(PersistenceOutcome.MISSING)

        try:
            categories = decode_categories(blob)
            self._replace(categories)
        except BlobDecodeError as error:
            LOGGER.error("Ignoring stored categories under key=%s: %s", self.key, error)
            return PersistenceResult.failed(PersistenceFailure.DECODE_FAILED, str(error))

        LOGGER.info("Loaded %s categories from key=%s", len(self._order), self.key)
        self._notify()
        return PersistenceResult.success(PersistenceOutcome.LOADED)

    def _replace(self, categories: List[Category]) -> None:
        """Swap in a complete category list, refusing duplicate identifiers."""

        by_id: Dict[str, Category] = {}
        for category in categories:
            if category.id in by_id:
                raise BlobDecodeError(f"Duplicate category id {category.id}")
            by_id[category.id] = category
        self._categories = by_id
        self._order = [category.id for category in categories]
