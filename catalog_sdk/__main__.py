# catalog_sdk/__main__.py
import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from rich import print
from rich.prompt import Confirm

from .config import settings
from .controller import CatalogController, CatalogView
from .session import Outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog", description="Catalog product manager")
    parser.add_argument("--api-url", default=settings.api_url, help="Store base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--search", default="", help="Only products whose name contains this text")

    ap = subparsers.add_parser("add", help="Add a product")
    ap.add_argument("--name", required=True, help="Product name")
    ap.add_argument("--price", required=True, help="Price in USD")
    ap.add_argument("--stock", required=True, help="Units in stock")

    up = subparsers.add_parser("update", help="Edit a product; omitted fields keep their value")
    up.add_argument("--id", required=True, help="ID of the product")
    up.add_argument("--name", help="Product name")
    up.add_argument("--price", help="Price in USD")
    up.add_argument("--stock", help="Units in stock")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("--id", required=True, help="ID of the product")
    dp.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    return parser


def print_view(view: CatalogView) -> None:
    if not view.rows:
        print("[italic yellow]No products found.[/italic yellow]")
    for row in view.rows:
        print(
            f"[dim]#{row.short_id}[/dim]  [bold]{row.name}[/bold]  "
            f"{row.price_label} {view.currency_code} [dim]({row.base_label})[/dim]  stock {row.stock}"
        )
    print(f"[cyan]{view.shown} of {view.total} products[/cyan]")


def report(outcome: Outcome, success_msg: str) -> int:
    if outcome.ok:
        print(f"[green]{success_msg}[/green]")
        return 0
    print(f"[red]Error: {outcome.error}[/red]", file=sys.stderr)
    return 1


async def run(args: argparse.Namespace) -> int:
    cfg = replace(settings, api_url=args.api_url)
    async with CatalogController.from_settings(cfg) as c:
        loaded = await c.start()
        if loaded.fallback:
            print(f"[yellow]Store unavailable ({loaded.error}); showing demo data.[/yellow]", file=sys.stderr)

        if args.command == "list":
            print_view(c.search(args.search))
            return 0

        if args.command == "add":
            c.add_requested()
            outcome = await c.form_submitted(name=args.name, price=args.price, stock=args.stock)
            return report(outcome, f"Product '{args.name}' added")

        if args.command == "update":
            if c.edit_requested(args.id) is None:
                print(f"[red]Error: product {args.id} not found[/red]", file=sys.stderr)
                return 1
            changes = {k: v for k, v in (("name", args.name), ("price", args.price), ("stock", args.stock)) if v is not None}
            outcome = await c.form_submitted(**changes)
            return report(outcome, f"Product {args.id} updated")

        if args.command == "delete":
            if not args.yes and not Confirm.ask("Delete this product?"):
                return 1
            outcome = await c.delete_requested(args.id)
            return report(outcome, f"Product {args.id} deleted")

    return 2


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
