#!/usr/bin/env python
import asyncio

from catalog_sdk.config import settings
from catalog_sdk.controller import CatalogController


def show(c: CatalogController):
    view = c.view()
    for row in view.rows:
        print(f"  #{row.short_id} {row.name:<20} {row.price_label:>12} ({row.base_label})  stock {row.stock}")
    print(f"  {view.shown} of {view.total} shown")


async def main():
    async with CatalogController.from_settings(settings) as c:
        # -----------------------------
        # Reset everything for demo
        # -----------------------------
        print("Resetting store...")
        await c.client.reset()

        # -----------------------------
        # Startup: rate first, then catalog
        # -----------------------------
        loaded = await c.start()
        print(f"\nRate: 1 USD = {c.rate} {c.rates.currency_code}; loaded {len(loaded.records)} products")

        # -----------------------------
        # Add products
        # -----------------------------
        print("\nAdding products...")
        for name, price, stock in [("Laptop", "1500", "3"), ("Mouse", "24.5", "10"), ("Mouse Pad", "7", "40")]:
            c.add_requested()
            outcome = await c.form_submitted(name=name, price=price, stock=stock)
            print(f"  {name}: {'ok' if outcome.ok else outcome.error}")
        show(c)

        # -----------------------------
        # Invalid draft stays open
        # -----------------------------
        print("\nSubmitting an invalid product...")
        c.add_requested()
        outcome = await c.form_submitted(name="  ", price="-1", stock="1.5")
        print(f"  rejected: {outcome.error} (fields: {outcome.error.fields})")
        c.modal_dismissed()

        # -----------------------------
        # Search
        # -----------------------------
        print("\nSearching for 'mouse'...")
        c.search("mouse")
        show(c)
        c.search("")

        # -----------------------------
        # Edit
        # -----------------------------
        laptop = next(p for p in c.state.records if p.name == "Laptop")
        print("\nDiscounting the laptop...")
        c.edit_requested(laptop.id)
        outcome = await c.form_submitted(price="1299.99")
        print(f"  {'ok' if outcome.ok else outcome.error}")
        show(c)

        # -----------------------------
        # Delete
        # -----------------------------
        print("\nDeleting the laptop...")
        outcome = await c.delete_requested(laptop.id)
        print(f"  {'ok' if outcome.ok else outcome.error}")
        show(c)


if __name__ == "__main__":
    asyncio.run(main())
