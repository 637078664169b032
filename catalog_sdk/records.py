# catalog_sdk/records.py
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Type

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Product(BaseModel):
    """A product as confirmed by the store.

    Accepts both ``id`` and the document-store ``_id`` key. Instances are
    frozen: the catalog replaces records, it never edits them in place.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    price: float
    stock: int
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @property
    def short_id(self) -> str:
        return self.id[-6:]


class OrderItem(BaseModel):
    productId: str
    quantity: int = Field(ge=1)


class Order(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    userEmail: str
    status: OrderStatus = OrderStatus.PENDING
    items: List[OrderItem] = Field(default_factory=list)
    total: float = Field(ge=0)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


RECORD_MODELS: Dict[str, Type[BaseModel]] = {
    "products": Product,
    "orders": Order,
}
