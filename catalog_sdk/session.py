# catalog_sdk/session.py
import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Union

from .client import RecordStoreClient
from .errors import DraftValidationError, StoreError
from .records import Product
from .state import CatalogState

logger = logging.getLogger(__name__)

FieldValue = Union[str, int, float]

# plain decimal text: no digit-group underscores, no hex/inf/nan words
_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass
class Draft:
    name: str = ""
    price: FieldValue = ""
    stock: FieldValue = ""
    editing_id: Optional[str] = None

    @property
    def is_update(self) -> bool:
        return self.editing_id is not None


@dataclass(frozen=True)
class Outcome:
    """Result of a store-backed command. ``error`` is None on success."""

    record: Optional[Product] = None
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _to_number(text: str) -> Optional[float]:
    text = text.strip()
    if not _NUMBER.fullmatch(text):
        return None
    return float(text)


def _field_text(value: float) -> str:
    """Form text for a stored number; whole floats lose their trailing ".0"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_price(value: FieldValue) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        price = _to_number(str(value))
    if price is None or not math.isfinite(price) or price < 0:
        return None
    return price


def _parse_stock(value: FieldValue) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        stock = value
    else:
        number = _to_number(str(value))
        # "2.0" is an integer, "1.5" is not
        if number is None or not math.isfinite(number) or not number.is_integer():
            return None
        stock = int(number)
    if stock < 0:
        return None
    return stock


def validate(draft: Draft) -> Dict[str, Any]:
    """Return the store payload for ``draft`` or raise DraftValidationError."""
    name = str(draft.name or "").strip()
    price = _parse_price(draft.price)
    stock = _parse_stock(draft.stock)

    problems = []
    if not name:
        problems.append(("name", "Name is required"))
    if price is None:
        problems.append(("price", "Invalid price"))
    if stock is None:
        problems.append(("stock", "Invalid stock"))
    if problems:
        raise DraftValidationError("; ".join(m for _, m in problems), fields=[f for f, _ in problems])
    return {"name": name, "price": price, "stock": stock}


class EditSession:
    """The add/edit form: which record is targeted and the values typed so far."""

    def __init__(self, client: RecordStoreClient, state: CatalogState):
        self.client = client
        self.state = state
        self.draft: Optional[Draft] = None

    @property
    def is_open(self) -> bool:
        return self.draft is not None

    @property
    def editing_id(self) -> Optional[str]:
        return self.draft.editing_id if self.draft else None

    def begin(self, record: Optional[Product] = None) -> Draft:
        if record is None:
            self.draft = Draft()
        else:
            self.draft = Draft(
                name=record.name,
                price=_field_text(record.price),
                stock=_field_text(record.stock),
                editing_id=record.id,
            )
        return self.draft

    def update_draft(self, **fields: FieldValue) -> Draft:
        if self.draft is None:
            raise RuntimeError("no edit in progress")
        unknown = set(fields) - {"name", "price", "stock"}
        if unknown:
            raise TypeError(f"unknown draft fields: {', '.join(sorted(unknown))}")
        self.draft = replace(self.draft, **fields)
        return self.draft

    def cancel(self) -> None:
        self.draft = None

    close = cancel

    async def submit(self) -> Outcome:
        draft = self.draft
        if draft is None:
            raise RuntimeError("no edit in progress")
        try:
            fields = validate(draft)
        except DraftValidationError as e:
            return Outcome(error=e)

        kind = self.state.kind
        try:
            if draft.is_update:
                record = await self.client.update(kind, draft.editing_id, fields)
                self.state.apply_update(record)
            else:
                record = await self.client.create(kind, fields)
                self.state.apply_create(record)
        except StoreError as e:
            logger.warning("Submit of %s failed: %s", draft.editing_id or "new product", e)
            return Outcome(error=e)

        # the form may have been closed or reopened while the call was pending
        if self.draft is draft:
            self.draft = None
        return Outcome(record=record)
