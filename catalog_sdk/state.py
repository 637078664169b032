# catalog_sdk/state.py
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .client import RecordStoreClient
from .errors import StoreError
from .records import Product

logger = logging.getLogger(__name__)

Listener = Callable[[Tuple[Product, ...]], None]

# Shown when the initial load fails.
DEMO_PRODUCTS: Tuple[Product, ...] = (
    Product(id="demo1", name="Sample Tee", price=19.99, stock=42),
    Product(id="demo2", name="Coffee Mug", price=9.5, stock=120),
    Product(id="demo3", name="Wireless Mouse", price=24.0, stock=17),
)


@dataclass(frozen=True)
class LoadResult:
    records: Tuple[Product, ...]
    fallback: bool = False
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogState:
    """Local cache of the store's products, newest first.

    Mutators are called only once the matching store call has succeeded,
    so the list never holds a record the store has not confirmed.
    """

    def __init__(
        self,
        client: RecordStoreClient,
        kind: str = "products",
        fallback: Optional[Iterable[Product]] = DEMO_PRODUCTS,
    ):
        self.client = client
        self.kind = kind
        self.fallback = tuple(fallback) if fallback is not None else None
        self._records: List[Product] = []
        self._listeners: List[Listener] = []

    @property
    def records(self) -> Tuple[Product, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Product]:
        return iter(tuple(self._records))

    def get(self, record_id: str) -> Optional[Product]:
        for r in self._records:
            if r.id == record_id:
                return r
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with a snapshot after every mutation. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        snapshot = self.records
        for listener in list(self._listeners):
            listener(snapshot)

    def replace(self, records: Iterable[Product]) -> None:
        self._records = list(records)
        self._changed()

    async def load(self) -> LoadResult:
        try:
            records = await self.client.list_all(self.kind)
        except StoreError as e:
            if self.fallback is None:
                logger.warning("Failed to load %s: %s", self.kind, e)
                return LoadResult(self.records, error=e)
            logger.warning("Failed to load %s (%s); showing demo data", self.kind, e)
            self.replace(self.fallback)
            return LoadResult(self.records, fallback=True, error=e)
        self.replace(records)
        return LoadResult(self.records)

    def apply_create(self, record: Product) -> None:
        # ids stay unique even if the store echoes an id we already hold
        self._records = [record] + [r for r in self._records if r.id != record.id]
        self._changed()

    def apply_update(self, record: Product) -> None:
        for i, r in enumerate(self._records):
            if r.id == record.id:
                self._records[i] = record
                self._changed()
                return

    def apply_delete(self, record_id: str) -> None:
        kept = [r for r in self._records if r.id != record_id]
        if len(kept) == len(self._records):
            return
        self._records = kept
        self._changed()
