# tests/test_concurrency.py
import asyncio
import httpx
from fastapi.testclient import TestClient
from vending import database
from vending.main import app

client = TestClient(app)

def _prepare_sale():
    # reset and seed one product with a vault that can pay change once
    client.post("/reset", json={"seed": False})
    r = client.post("/operator/products", json={"name": "last", "quantity": 1, "price": 1.0})
    pid = r.json()["product_id"]
    client.post("/operator/coins", json={"denomination": 0.5, "count": 2})
    client.post("/transaction/select", json={"product_id": pid})
    client.post("/transaction/coins", json={"denomination": 2.0})
    return pid

async def _confirm_task():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post("/transaction/confirm")
        return r

async def _confirm_twice():
    return await asyncio.gather(_confirm_task(), _confirm_task())

async def _confirm_while_locked(pid):
    # fresh lock bound to this event loop
    database._LOCKS.pop("machine", None)
    lock = database._get_lock("machine")
    await lock.acquire()
    task = asyncio.create_task(_confirm_task())
    await asyncio.sleep(0.2)
    waiting = not task.done()
    quantity_while_locked = database.get_machine().catalog.get(pid).quantity
    lock.release()
    r = await task
    return waiting, quantity_while_locked, r

def test_second_confirm_finds_reset_transaction():
    pid = _prepare_sale()

    results = asyncio.run(_confirm_twice())
    statuses = sorted(r.json()["status"] for r in results)
    # one sells, the other finds the transaction already reset
    assert statuses == ["nothing to confirm", "purchased"]
    assert client.get(f"/products/{pid}").json()["quantity"] == 0
    assert client.get("/vault").json()["vault"] == {"2.0": 1}

def test_confirm_waits_for_machine_lock():
    pid = _prepare_sale()

    waiting, quantity_while_locked, r = asyncio.run(_confirm_while_locked(pid))
    # nothing is sold while another caller holds the machine lock
    assert waiting is True
    assert quantity_while_locked == 1
    assert r.status_code == 200
    assert r.json()["status"] == "purchased"
    assert client.get(f"/products/{pid}").json()["quantity"] == 0
