# vending/core.py
from pydantic import BaseModel, Field
from typing import Dict, Any

from .models import CoinBag, Product


class ProductIn(BaseModel):
    name: str
    quantity: int = Field(ge=0)
    price: float = Field(ge=0, allow_inf_nan=False)

class CoinDepositIn(BaseModel):
    denomination: float
    count: int

class SelectProductIn(BaseModel):
    product_id: str

class InsertCoinIn(BaseModel):
    denomination: float

class ResetIn(BaseModel):
    seed: bool = True

def _make_product_dict(p: Product) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "price": p.price,
        "quantity": p.quantity,
        "available": p.available()
    }

def _coins_dict(bag: CoinBag) -> Dict[str, int]:
    return CoinBag(bag).as_dict()
