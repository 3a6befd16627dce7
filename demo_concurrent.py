import asyncio
from vending.config import load_settings
from sdk.vending_client import VendingClient

async def confirm(client, label):
    r = await client.confirm_purchase_async()
    body = r.json()
    if r.status_code == 200 and body.get("status") == "purchased":
        print(f"✅ {label} bought {body['product']['name']}, change: {body['change']}")
    elif r.status_code == 200:
        print(f"⚠️  {label}: {body['status']}")
    elif r.status_code == 409:
        print(f"❌ {label}: not enough change, refund {body['detail']['refund']}")
    else:
        print(f"❌ {label} failed with {r.status_code}: {body}")

async def main():
    c = VendingClient(base_url=load_settings().api_url)
    c.reset(seed=False)

    product = c.add_product("Last Cola", 1, 1.0)["product"]
    c.deposit_coins(0.5, 2)
    print(f"\n🥤 Stocked: {product}")

    c.select_product(product["id"])
    c.insert_coin(2.0)

    # Only one confirmation can see the selected product; the other finds an empty transaction
    print("\n⚡ Confirming twice concurrently...")
    await asyncio.gather(
        confirm(c, "first"),
        confirm(c, "second"),
    )

    print("\n📦 Final product state:", c.get_product(product["id"]))
    print("🪙 Vault:", c.view_vault())

if __name__ == "__main__":
    asyncio.run(main())
