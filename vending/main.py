# vending/main.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from typing import Optional

from .config import configure_logging, load_settings
from .core import ProductIn, CoinDepositIn, SelectProductIn, InsertCoinIn, ResetIn
from .errors import InvalidInput
from . import handlers

configure_logging(load_settings().log_level)

app = FastAPI(title="vending-machine (in-memory)")

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

# ---------------------------
# Operator endpoints
# ---------------------------
@app.post("/operator/products", status_code=201)
async def add_product(payload: ProductIn):
    return await handlers.add_product_logic(payload)

@app.post("/operator/coins")
async def deposit_coins(payload: CoinDepositIn):
    return await handlers.deposit_coins_logic(payload)

@app.get("/vault")
async def get_vault():
    return await handlers.vault_logic()

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products")
async def list_products(available_only: bool = False):
    return await handlers.list_products_logic(available_only)

@app.get("/products/{product_id}")
async def get_product(product_id: str):
    return await handlers.get_product_logic(product_id)

# ---------------------------
# Transaction endpoints
# ---------------------------
@app.get("/transaction")
async def get_transaction():
    return await handlers.transaction_logic()

@app.post("/transaction/select")
async def select_product(payload: SelectProductIn):
    return await handlers.select_product_logic(payload)

@app.post("/transaction/coins")
async def insert_coin(payload: InsertCoinIn):
    return await handlers.insert_coin_logic(payload)

@app.get("/transaction/change")
async def preview_change():
    return await handlers.preview_change_logic()

@app.post("/transaction/confirm")
async def confirm_purchase():
    return await handlers.confirm_purchase_logic()

@app.post("/transaction/cancel")
async def cancel():
    return await handlers.cancel_logic()

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all(payload: Optional[ResetIn] = None):
    seed = payload.seed if payload is not None else True
    return await handlers.reset_logic(seed)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8085)
