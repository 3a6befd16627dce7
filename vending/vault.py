# vending/vault.py
import logging
from decimal import Decimal
from typing import Optional

from .errors import InsufficientChange, InvalidInput
from .models import DENOMINATIONS, Amount, CoinBag, Denomination, to_decimal

logger = logging.getLogger(__name__)


class CoinVault:
    """
    The machine's own coin reserve.

    Change is computed with a greedy sweep over shrinking denomination
    subsets: first all six coins, then everything except the largest, and so
    on down to quarters only. Each subset gets one descending greedy pass and
    the first pass that lands exactly on the target wins. This is not an
    exhaustive coin-change search and can miss a valid decomposition; callers
    rely on that exact accept/reject behaviour.
    """

    def __init__(self, coins: Optional[CoinBag] = None):
        self._coins = CoinBag(coins)

    def deposit(self, denomination, count: int) -> None:
        denomination = Denomination.parse(denomination)
        self._coins.add(denomination, count)
        logger.debug("deposited %s x %s", count, denomination.value)

    def reconcile(self, inserted: CoinBag, change: CoinBag) -> None:
        # both steps are applied to a copy first so a failure leaves the vault untouched
        updated = (self._coins + inserted) - change
        self._coins = updated
        logger.info("vault reconciled: in=%r out=%r", CoinBag(inserted), CoinBag(change))

    def snapshot(self) -> CoinBag:
        return self._coins.copy()

    def compute_change(self, target_sum: Amount, inserted_coins: Optional[CoinBag] = None) -> CoinBag:
        target = to_decimal(target_sum)
        if target == 0:
            return CoinBag()

        pool = self._coins + (inserted_coins or {})
        for length in range(len(DENOMINATIONS), 0, -1):
            change = _greedy_pass(target, pool, DENOMINATIONS[-length:])
            if change is not None:
                return change

        logger.info("no change for %s with pool %r", target, pool)
        raise InsufficientChange(target)


def _greedy_pass(target: Decimal, pool: CoinBag, denominations) -> Optional[CoinBag]:
    remaining = target
    change = CoinBag()
    for denomination in denominations:
        if remaining <= 0:
            break
        take = min(pool[denomination], int(remaining // denomination.amount))
        if take:
            change[denomination] = take
            remaining -= denomination.amount * take
    if remaining != 0:
        return None
    return change
