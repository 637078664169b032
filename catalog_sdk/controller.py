# catalog_sdk/controller.py
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import httpx

from .client import RecordStoreClient
from .config import Settings
from .errors import StoreError
from .rates import RateProvider, convert, format_money
from .records import Product
from .search import filter_records
from .session import Draft, EditSession, FieldValue, Outcome
from .state import DEMO_PRODUCTS, CatalogState, Listener, LoadResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductRow:
    id: str
    short_id: str
    name: str
    stock: int
    price: float
    display_price: float
    price_label: str
    base_label: str


@dataclass(frozen=True)
class CatalogView:
    rows: Tuple[ProductRow, ...]
    total: int
    query: str
    rate: float
    currency_code: str
    currency_symbol: str
    sales_label: str

    @property
    def shown(self) -> int:
        return len(self.rows)


class CatalogController:
    """Everything a front end needs: user intents in, a view model out.

    Owns the store client, rate provider, catalog state and edit session for
    one session. Front ends only render ``view()`` and forward intents.
    """

    def __init__(
        self,
        client: RecordStoreClient,
        rates: RateProvider,
        currency_symbol: str = "₹",
        fixed_rate: bool = False,
        initial_products: Optional[Iterable[Product]] = None,
        fallback: Optional[Iterable[Product]] = DEMO_PRODUCTS,
        estimated_sales: float = 12430.0,
    ):
        self.client = client
        self.rates = rates
        self.currency_symbol = currency_symbol
        self.fixed_rate = fixed_rate
        self.initial_products = tuple(initial_products) if initial_products else ()
        self.estimated_sales = estimated_sales
        self.state = CatalogState(client, fallback=fallback)
        self.session = EditSession(client, self.state)
        self.query = ""

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rate_transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs,
    ) -> "CatalogController":
        client = RecordStoreClient(settings.api_url, timeout=settings.timeout, transport=transport)
        rates = RateProvider(
            settings.rate_url,
            currency_code=settings.currency_code,
            default_rate=settings.exchange_rate or settings.default_rate,
            timeout=settings.timeout,
            transport=rate_transport,
        )
        kwargs.setdefault("fallback", DEMO_PRODUCTS if settings.demo_fallback else None)
        return cls(
            client,
            rates,
            currency_symbol=settings.currency_symbol,
            fixed_rate=settings.exchange_rate is not None,
            estimated_sales=settings.estimated_sales,
            **kwargs,
        )

    async def __aenter__(self) -> "CatalogController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # ---------------------------
    # Startup
    # ---------------------------
    async def start(self) -> LoadResult:
        """Fetch the rate, then load the catalog, so the first render uses the fresh rate."""
        if not self.fixed_rate:
            await self.rates.refresh()
        if self.initial_products:
            self.state.replace(self.initial_products)
            return LoadResult(self.state.records)
        return await self.state.load()

    def subscribe(self, listener: Listener):
        return self.state.subscribe(listener)

    # ---------------------------
    # User intents
    # ---------------------------
    def search(self, text: str) -> CatalogView:
        self.query = text or ""
        return self.view()

    def add_requested(self) -> Draft:
        return self.session.begin()

    def edit_requested(self, record_id: str) -> Optional[Draft]:
        record = self.state.get(record_id)
        if record is None:
            return None
        return self.session.begin(record)

    async def delete_requested(self, record_id: str) -> Outcome:
        """Delete after the front end has confirmed with the user."""
        record = self.state.get(record_id)
        try:
            await self.client.remove(self.state.kind, record_id)
        except StoreError as e:
            logger.warning("Delete of %s failed: %s", record_id, e)
            return Outcome(record=record, error=e)
        self.state.apply_delete(record_id)
        if self.session.editing_id == record_id:
            self.session.close()
        return Outcome(record=record)

    async def form_submitted(self, **fields: FieldValue) -> Outcome:
        if not self.session.is_open:
            self.session.begin()
        if fields:
            self.session.update_draft(**fields)
        return await self.session.submit()

    def modal_dismissed(self) -> None:
        self.session.close()

    # ---------------------------
    # View model
    # ---------------------------
    @property
    def rate(self) -> float:
        return self.rates.rate

    def row(self, p: Product) -> ProductRow:
        display = convert(p.price, self.rate)
        return ProductRow(
            id=p.id,
            short_id=p.short_id,
            name=p.name,
            stock=p.stock,
            price=p.price,
            display_price=display,
            price_label=format_money(display, self.currency_symbol),
            base_label=format_money(p.price, "$") + " USD",
        )

    def view(self) -> CatalogView:
        visible = filter_records(self.state.records, self.query)
        return CatalogView(
            rows=tuple(self.row(p) for p in visible),
            total=len(self.state),
            query=self.query,
            rate=self.rate,
            currency_code=self.rates.currency_code,
            currency_symbol=self.currency_symbol,
            sales_label=format_money(self.estimated_sales * self.rate, self.currency_symbol, decimals=0),
        )
