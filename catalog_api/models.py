# catalog_api/models.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ProductIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    stock: int = Field(..., ge=0)


class OrderItem(BaseModel):
    productId: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class OrderUpdate(BaseModel):
    """Partial order update; only the fields sent are written."""

    model_config = ConfigDict(str_strip_whitespace=True)

    userEmail: Optional[str] = Field(None, min_length=1)
    status: Optional[OrderStatus] = None
    items: Optional[List[OrderItem]] = None
    total: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
