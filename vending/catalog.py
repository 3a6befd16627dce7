# vending/catalog.py
from typing import List, Optional

from .errors import InvalidInput
from .models import Product, is_amount


class Catalog:
    def __init__(self):
        self._products: List[Product] = []

    def add_product(self, name: str, quantity: int, price) -> Product:
        if not isinstance(name, str):
            raise InvalidInput("product name must be a string")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidInput("quantity must be a whole number >= 0")
        if not is_amount(price) or price < 0:
            raise InvalidInput("price must be a finite number >= 0")

        existing = self._find(name)
        if existing is not None:
            return existing.increment(quantity)

        product = Product(name=name, quantity=quantity, price=float(price))
        self._products.append(product)
        return product

    def decrement_quantity(self, product: Product, by: int) -> Product:
        if not self.is_available(product):
            raise InvalidInput(f"product is not available: {getattr(product, 'name', product)!r}")
        return product.decrement(by)

    def is_available(self, product) -> bool:
        # identity, not equality: a copy of a catalog product is a different product
        return any(p is product for p in self.available_products())

    def all_products(self) -> List[Product]:
        return list(self._products)

    def available_products(self) -> List[Product]:
        return [p for p in self._products if p.available()]

    def is_empty(self) -> bool:
        return not self.available_products()

    def get(self, product_id: str) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def _find(self, name: str) -> Optional[Product]:
        for p in self._products:
            if p.name == name:
                return p
        return None
