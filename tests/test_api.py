# tests/test_api.py
from fastapi.testclient import TestClient
from vending.main import app

client = TestClient(app)

def reset(seed=False):
    client.post("/reset", json={"seed": seed})

def stock(name="Gum", quantity=2, price=1.0):
    r = client.post("/operator/products", json={"name": name, "quantity": quantity, "price": price})
    assert r.status_code == 201
    return r.json()["product_id"]

def test_exact_payment_purchase():
    reset()
    pid = stock()
    r = client.post("/transaction/select", json={"product_id": pid})
    assert r.json()["state"] == "AWAITING_PAYMENT"
    client.post("/transaction/coins", json={"denomination": 0.5})
    t = client.post("/transaction/coins", json={"denomination": 0.5}).json()
    assert t["inserted_sum"] == 1.0
    assert t["has_sufficient_funds"] is True

    r2 = client.post("/transaction/confirm")
    assert r2.status_code == 200
    body = r2.json()
    assert body["status"] == "purchased"
    assert body["change"] == {}
    # catalog and vault updated
    assert client.get(f"/products/{pid}").json()["quantity"] == 1
    assert client.get("/vault").json()["vault"] == {"0.5": 2}
    assert client.get("/transaction").json()["state"] == "AWAITING_PRODUCT"

def test_change_from_vault():
    reset()
    pid = stock()
    client.post("/operator/coins", json={"denomination": 0.25, "count": 3})
    client.post("/operator/coins", json={"denomination": 2.0, "count": 10})
    client.post("/operator/coins", json={"denomination": 3.0, "count": 1})
    client.post("/transaction/select", json={"product_id": pid})
    client.post("/transaction/coins", json={"denomination": 5.0})
    assert client.get("/transaction/change").json()["change"] == {"2.0": 2}

    body = client.post("/transaction/confirm").json()
    assert body["change"] == {"2.0": 2}
    assert client.get("/vault").json()["vault"] == {"5.0": 1, "3.0": 1, "2.0": 8, "0.25": 3}

def test_not_enough_change():
    reset()
    pid = stock()
    client.post("/transaction/select", json={"product_id": pid})
    client.post("/transaction/coins", json={"denomination": 5.0})
    r = client.post("/transaction/confirm")
    assert r.status_code == 409
    assert r.json()["detail"] == {"error": "not_enough_change", "refund": {"5.0": 1}}
    # nothing changed, transaction reset
    assert client.get(f"/products/{pid}").json()["quantity"] == 2
    assert client.get("/vault").json()["vault"] == {}
    assert client.get("/transaction").json()["state"] == "AWAITING_PRODUCT"

def test_invalid_input():
    reset()
    pid = stock()
    # coin before product
    r = client.post("/transaction/coins", json={"denomination": 1.0})
    assert r.status_code == 400
    client.post("/transaction/select", json={"product_id": pid})
    r = client.post("/transaction/coins", json={"denomination": 0.1})
    assert r.status_code == 400
    r = client.post("/operator/coins", json={"denomination": 1.0, "count": -2})
    assert r.status_code == 400

def test_non_finite_price_rejected():
    reset()
    for raw in ("Infinity", "NaN"):
        r = client.post(
            "/operator/products",
            content='{"name": "X", "quantity": 1, "price": %s}' % raw,
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 422
    assert client.get("/products").json() == []

def test_unknown_and_sold_out_products():
    reset()
    r = client.post("/transaction/select", json={"product_id": "nope"})
    assert r.status_code == 404
    assert client.get("/products/nope").status_code == 404
    pid = stock("Chips", 0, 2.0)
    r = client.post("/transaction/select", json={"product_id": pid})
    assert r.status_code == 400
    assert client.get("/products", params={"available_only": "true"}).json() == []
    assert len(client.get("/products").json()) == 1

def test_confirm_with_nothing_selected():
    reset()
    r = client.post("/transaction/confirm")
    assert r.status_code == 200
    assert r.json() == {"status": "nothing to confirm"}

def test_cancel_refunds():
    reset()
    pid = stock()
    client.post("/transaction/select", json={"product_id": pid})
    client.post("/transaction/coins", json={"denomination": 2.0})
    r = client.post("/transaction/cancel")
    assert r.json() == {"status": "cancelled", "refund": {"2.0": 1}}
    assert client.get("/vault").json()["vault"] == {}

def test_seeded_reset():
    reset(seed=True)
    names = [p["name"] for p in client.get("/products", params={"available_only": "true"}).json()]
    assert "Coca-Cola" in names
    assert "Chips" not in names
    assert client.get("/vault").json()["vault"]["5.0"] == 2
