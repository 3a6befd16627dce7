# sdk/vending_client.py
import requests
import httpx
from rich import print

class VendingClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def reset(self, seed: bool = True):
        r = self.session.post(f"{self.base_url}/reset", json={"seed": seed}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Operator
    def add_product(self, name: str, quantity: int, price: float):
        r = self.session.post(f"{self.base_url}/operator/products", json={
            "name": name, "quantity": quantity, "price": price
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def deposit_coins(self, denomination: float, count: int):
        r = self.session.post(f"{self.base_url}/operator/coins", json={
            "denomination": denomination, "count": count
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def view_vault(self):
        r = self.session.get(f"{self.base_url}/vault", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Products
    def list_products(self, available_only: bool = False):
        params = {}
        if available_only:
            params["available_only"] = "true"
        r = self.session.get(f"{self.base_url}/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Transaction
    def view_transaction(self):
        r = self.session.get(f"{self.base_url}/transaction", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def select_product(self, product_id: str):
        r = self.session.post(f"{self.base_url}/transaction/select", json={"product_id": product_id}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def insert_coin(self, denomination: float):
        r = self.session.post(f"{self.base_url}/transaction/coins", json={"denomination": denomination}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def preview_change(self):
        r = self.session.get(f"{self.base_url}/transaction/change", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def confirm_purchase(self):
        r = self.session.post(f"{self.base_url}/transaction/confirm", timeout=self.timeout)
        # do not r.raise_for_status() — callers want to inspect 409 not_enough_change
        return r

    async def confirm_purchase_async(self):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/transaction/confirm")
            return r

    def cancel(self):
        r = self.session.post(f"{self.base_url}/transaction/cancel", timeout=self.timeout)
        r.raise_for_status()
        return r.json()


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Vending machine CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    lp = subparsers.add_parser("list-products", help="List all products")
    lp.add_argument("--available-only", action="store_true", help="Show only products in stock")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    ap = subparsers.add_parser("add-product", help="Add a product (or restock one with the same name)")
    ap.add_argument("--name", required=True, help="Product name")
    ap.add_argument("--price", type=float, required=True, help="Price")
    ap.add_argument("--quantity", type=int, required=True, help="Quantity available")

    # ---------------------------
    # Vault commands
    # ---------------------------
    dc = subparsers.add_parser("deposit-coins", help="Load coins into the vault")
    dc.add_argument("--denomination", type=float, required=True, help="Coin value")
    dc.add_argument("--count", type=int, required=True, help="Number of coins")

    subparsers.add_parser("view-vault", help="Show the coins the machine holds")

    # ---------------------------
    # Transaction commands
    # ---------------------------
    subparsers.add_parser("view-transaction", help="Show the current transaction")

    sel = subparsers.add_parser("select", help="Select a product")
    sel.add_argument("--product-id", required=True, help="ID of the product")

    ins = subparsers.add_parser("insert-coin", help="Insert one coin")
    ins.add_argument("--denomination", type=float, required=True, help="Coin value")

    subparsers.add_parser("preview-change", help="Show the change a purchase would return")
    subparsers.add_parser("confirm", help="Confirm the purchase")
    subparsers.add_parser("cancel", help="Cancel and get the inserted coins back")

    rs = subparsers.add_parser("reset", help="Reset the machine")
    rs.add_argument("--no-seed", action="store_true", help="Start empty instead of seeded")
    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = VendingClient(base_url=os.getenv("VENDING_API_URL", "http://127.0.0.1:8085"))

    if args.command == "list-products":
        print(c.list_products(args.available_only))

    elif args.command == "get-product":
        print(c.get_product(args.product_id))

    elif args.command == "add-product":
        print(c.add_product(args.name, args.quantity, args.price))

    elif args.command == "deposit-coins":
        print(c.deposit_coins(args.denomination, args.count))

    elif args.command == "view-vault":
        print(c.view_vault())

    elif args.command == "view-transaction":
        print(c.view_transaction())

    elif args.command == "select":
        print(c.select_product(args.product_id))

    elif args.command == "insert-coin":
        print(c.insert_coin(args.denomination))

    elif args.command == "preview-change":
        print(c.preview_change())

    elif args.command == "confirm":
        print(c.confirm_purchase().json())

    elif args.command == "cancel":
        print(c.cancel())
    elif args.command == "reset":
        print(c.reset(seed=not args.no_seed))
