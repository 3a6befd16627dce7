# vending/machine.py
import logging
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from .catalog import Catalog
from .errors import InvalidInput
from .models import CoinBag, Denomination, Product, to_decimal
from .vault import CoinVault

logger = logging.getLogger(__name__)


class TransactionState(Enum):
    AWAITING_PRODUCT = "AWAITING_PRODUCT"
    AWAITING_PAYMENT = "AWAITING_PAYMENT"


class VendingMachine:
    """
    Per-customer transaction on top of a shared catalog and coin vault.

    The machine is always inside exactly one transaction: a selected product
    (or none) plus the coins inserted so far. Every purchase attempt ends
    with a reset, whatever its outcome.
    """

    def __init__(self, catalog: Optional[Catalog] = None, vault: Optional[CoinVault] = None):
        self.catalog = catalog if catalog is not None else Catalog()
        self.vault = vault if vault is not None else CoinVault()
        self._reset()

    # ---------------------------
    # Catalog / vault passthrough
    # ---------------------------
    def add_product(self, name: str, quantity: int, price) -> Product:
        return self.catalog.add_product(name, quantity, price)

    def available_products(self) -> List[Product]:
        return self.catalog.available_products()

    def available_products_empty(self) -> bool:
        return self.catalog.is_empty()

    def add_coin(self, denomination, count: int) -> None:
        self.vault.deposit(denomination, count)

    # ---------------------------
    # Transaction
    # ---------------------------
    @property
    def current_product(self) -> Optional[Product]:
        return self._current_product

    @property
    def inserted_coins(self) -> CoinBag:
        return self._inserted_coins.copy()

    @property
    def state(self) -> TransactionState:
        if self._current_product is None:
            return TransactionState.AWAITING_PRODUCT
        return TransactionState.AWAITING_PAYMENT

    def select_product(self, product: Product) -> Product:
        if self.state is not TransactionState.AWAITING_PRODUCT:
            raise InvalidInput("a product is already selected")
        if not self.catalog.is_available(product):
            raise InvalidInput(f"product is not available: {getattr(product, 'name', product)!r}")

        self._current_product = product
        self._inserted_coins = CoinBag()
        logger.info("selected %s", product.name)
        return product

    def insert_coin(self, denomination) -> Denomination:
        if self._current_product is None:
            raise InvalidInput("select a product before inserting coins")
        denomination = Denomination.parse(denomination)
        self._inserted_coins.add(denomination)
        return denomination

    def inserted_sum(self) -> Decimal:
        return self._inserted_coins.total()

    def has_sufficient_funds(self) -> bool:
        if self._nothing_to_buy():
            return False
        return self.inserted_sum() >= to_decimal(self._current_product.price)

    def preview_change(self) -> CoinBag:
        if self._nothing_to_buy():
            return CoinBag()
        return self.vault.compute_change(
            self.inserted_sum() - to_decimal(self._current_product.price),
            self._inserted_coins,
        )

    def confirm_purchase(self) -> Union[bool, CoinBag]:
        """
        Sell the selected product and return its change.

        Returns False when there is nothing to buy. Raises InsufficientChange
        without touching the catalog or the vault when change can't be made;
        the inserted coins are then the caller's to hand back.
        """
        try:
            if self._nothing_to_buy():
                return False

            product = self._current_product
            inserted = self._inserted_coins.copy()
            change = self.preview_change()
            self.catalog.decrement_quantity(product, 1)
            self.vault.reconcile(inserted, change)
            logger.info("sold %s for %s, change %r", product.name, inserted.total(), change)
            return change
        finally:
            self._reset()

    def cancel(self) -> CoinBag:
        refund = self._inserted_coins.copy()
        if self._current_product is not None:
            logger.info("cancelled %s, refunding %r", self._current_product.name, refund)
        self._reset()
        return refund

    def _nothing_to_buy(self) -> bool:
        return self._current_product is None or not self._inserted_coins

    def _reset(self) -> None:
        self._current_product: Optional[Product] = None
        self._inserted_coins = CoinBag()
