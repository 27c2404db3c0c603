# --- Pydantic schemas for durable cart / wishlist records ---
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class WishlistItemRecord(BaseModel):
    id: Union[int, str] = Field(..., description="Opaque product or variation id")
    name: str = ""
    price: float = 0.0
    image: Optional[str] = None
    slug: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class CartItemRecord(WishlistItemRecord):
    quantity: int = 1


CartRecord = TypeAdapter(List[CartItemRecord])
WishlistRecord = TypeAdapter(List[WishlistItemRecord])
