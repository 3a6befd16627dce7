from fastapi import HTTPException

# Import from other modules
from .core import (
    ProductIn, CoinDepositIn, SelectProductIn, InsertCoinIn,
    _make_product_dict, _coins_dict
)
from .database import get_machine, reset_machine, _get_lock
from .errors import InsufficientChange

# This file contains the core logic for all API endpoints.

def _transaction_view(machine):
    product = machine.current_product
    return {
        "state": machine.state.value,
        "product": _make_product_dict(product) if product is not None else None,
        "inserted_coins": _coins_dict(machine.inserted_coins),
        "inserted_sum": float(machine.inserted_sum()),
        "has_sufficient_funds": machine.has_sufficient_funds(),
    }

# Operator endpoints
async def add_product_logic(payload: ProductIn):
    machine = get_machine()
    lock = _get_lock("machine")
    async with lock:
        product = machine.add_product(payload.name, payload.quantity, payload.price)
    return {"product_id": product.id, "product": _make_product_dict(product)}

async def deposit_coins_logic(payload: CoinDepositIn):
    machine = get_machine()
    lock = _get_lock("machine")
    async with lock:
        machine.add_coin(payload.denomination, payload.count)
        return {"vault": _coins_dict(machine.vault.snapshot())}

async def vault_logic():
    return {"vault": _coins_dict(get_machine().vault.snapshot())}

# Product endpoints
async def list_products_logic(available_only: bool = False):
    machine = get_machine()
    products = machine.available_products() if available_only else machine.catalog.all_products()
    return [_make_product_dict(p) for p in products]

async def get_product_logic(product_id: str):
    p = get_machine().catalog.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return _make_product_dict(p)

# Transaction endpoints
async def select_product_logic(payload: SelectProductIn):
    machine = get_machine()
    product = machine.catalog.get(payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="product not found")
    machine.select_product(product)
    return _transaction_view(machine)

async def insert_coin_logic(payload: InsertCoinIn):
    machine = get_machine()
    machine.insert_coin(payload.denomination)
    return _transaction_view(machine)

async def transaction_logic():
    return _transaction_view(get_machine())

async def preview_change_logic():
    machine = get_machine()
    try:
        change = machine.preview_change()
    except InsufficientChange:
        raise HTTPException(status_code=409, detail="not_enough_change")
    return {"change": _coins_dict(change)}

async def confirm_purchase_logic():
    machine = get_machine()
    lock = _get_lock("machine")
    await lock.acquire()

    try:
        product = machine.current_product
        refund = machine.inserted_coins
        try:
            change = machine.confirm_purchase()
        except InsufficientChange:
            raise HTTPException(
                status_code=409,
                detail={"error": "not_enough_change", "refund": _coins_dict(refund)},
            )
        if change is False:
            return {"status": "nothing to confirm"}
        return {
            "status": "purchased",
            "product": _make_product_dict(product),
            "change": _coins_dict(change),
        }
    finally:
        lock.release()

async def cancel_logic():
    refund = get_machine().cancel()
    return {"status": "cancelled", "refund": _coins_dict(refund)}

async def reset_logic(seed: bool = True):
    reset_machine(seed=seed)
    return {"status": "reset"}
