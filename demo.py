#!/usr/bin/env python
from vending.config import load_settings
from sdk.vending_client import VendingClient

def main():
    c = VendingClient(base_url=load_settings().api_url)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting machine (empty)...")
    c.reset(seed=False)

    # -----------------------------
    # Stock the machine
    # -----------------------------
    print("\nAdding products...")
    cola = c.add_product("Cola", 3, 1.5)["product"]
    gum = c.add_product("Gum", 2, 1.0)["product"]
    print(cola)
    print(gum)

    print("\nLoading coins...")
    c.deposit_coins(0.25, 3)
    c.deposit_coins(2.0, 10)
    print(c.deposit_coins(3.0, 1))

    # -----------------------------
    # Exact payment
    # -----------------------------
    print("\nBuying Gum with two 0.5 coins...")
    c.select_product(gum["id"])
    c.insert_coin(0.5)
    print(c.insert_coin(0.5))
    print(c.confirm_purchase().json())

    # -----------------------------
    # Overpayment
    # -----------------------------
    print("\nBuying Cola with a 5.0 coin...")
    c.select_product(cola["id"])
    c.insert_coin(5.0)
    print(c.preview_change())
    print(c.confirm_purchase().json())

    print("\nVault after purchases...")
    print(c.view_vault())
    print(c.list_products())

    # -----------------------------
    # Not enough change (empty vault)
    # -----------------------------
    print("\nBuying Water with a 5.0 coin from an empty machine...")
    c.reset(seed=False)
    water = c.add_product("Water", 1, 1.0)["product"]
    c.select_product(water["id"])
    c.insert_coin(5.0)
    r = c.confirm_purchase()
    print(r.status_code, r.json())
    print(c.get_product(water["id"]))

if __name__ == "__main__":
    main()
