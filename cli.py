# cli.py
import asyncio
import logging
import sys
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from catalog_sdk.config import settings
from catalog_sdk.controller import CatalogController, CatalogView
from catalog_sdk.session import Draft, Outcome

console = Console()
_session: Optional[PromptSession] = None

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(view: CatalogView):
    if not view.rows:
        console.print("[italic yellow]No products found.[/italic yellow]")
        return

    title = "📦 Products"
    if view.query.strip():
        title += f" matching '{view.query.strip()}'"
    table = Table(
        title=title,
        caption=f"{view.shown} of {view.total} shown",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=8)
    table.add_column("Name", style="bold", width=24)
    table.add_column(f"Price ({view.currency_code})", justify="right", width=14)
    table.add_column("USD", justify="right", style="dim", width=14)
    table.add_column("Stock", justify="right", width=8)

    for row in view.rows:
        table.add_row(
            f"#{row.short_id}",
            row.name,
            row.price_label,
            row.base_label,
            str(row.stock),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def create_header(c: CatalogController):
    view = c.view()
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Catalog Manager",
        f"[bold blue]{view.total} products · est. sales {view.sales_label}[/bold blue]",
        f"[dim]1 USD = {view.rate:g} {view.currency_code} · {now}[/dim]"
    )
    return Panel(header, style="bold blue")


async def with_spinner(coro):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description="Processing...", total=None)
        return await coro


def report(outcome: Outcome, success_msg: str) -> bool:
    if outcome.ok:
        console.print(show_status(success_msg, True))
        return True
    console.print(show_status(f"Error: {outcome.error}", False))
    return False


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
async def ask(message: str, completer=None, default: str = "") -> str:
    global _session
    if _session is None:
        _session = PromptSession()
    return await _session.prompt_async(f"{message} ", completer=completer, style=custom_style, default=default)


def product_completer(c: CatalogController):
    words = []
    for p in c.state.records:
        words.extend([p.id, p.name])
    return WordCompleter([w for w in words if w], ignore_case=True)


async def pick_product(c: CatalogController) -> Optional[str]:
    """Resolve an id, short id or exact name typed by the user to a product id."""
    raw = (await ask("Product (id or name)", completer=product_completer(c))).strip()
    if not raw:
        return None
    lowered = raw.lower().lstrip("#")
    for p in c.state.records:
        if lowered in (p.id.lower(), p.short_id.lower(), p.name.lower()):
            return p.id
    console.print(show_status(f"No product matches '{raw}'", False))
    return None


async def fill_form(c: CatalogController, draft: Draft, title: str) -> bool:
    """Prompt for each field and submit; on failure offer to retry with the values kept."""
    while True:
        console.print(Panel.fit(f"[bold]{title}[/bold]", border_style="yellow"))
        name = await ask("Name:", default=str(draft.name))
        price = await ask("Price (USD):", default=str(draft.price))
        stock = await ask("Stock:", default=str(draft.stock))
        outcome = await with_spinner(c.form_submitted(name=name, price=price, stock=stock))
        if report(outcome, f"Saved '{outcome.record.name}'" if outcome.ok else ""):
            return True
        draft = c.session.draft
        if draft is None or not Confirm.ask("Edit the form again?"):
            c.modal_dismissed()
            return False


# ---------------------------
# Main menu
# ---------------------------
async def menu():
    async with CatalogController.from_settings(settings) as c:
        console.clear()
        loaded = await with_spinner(c.start())
        console.print(create_header(c))
        if loaded.fallback:
            console.print(show_status(f"Store unavailable ({loaded.error}); showing demo data", False))
        show_products(c.view())

        while True:
            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)

            options = [
                ("1", "📦 List products", "4", "✏️ Edit product"),
                ("2", "🔍 Search products", "5", "🗑️ Delete product"),
                ("3", "➕ Add product", "q", "👋 Quit"),
            ]
            for row in options:
                menu_table.add_row(*row)
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = (await ask(
                "\nChoose an option",
                completer=WordCompleter([str(i) for i in range(1, 6)] + ["q", "quit", "exit"])
            )).strip()

            if choice == "1":
                show_products(c.view())

            elif choice == "2":
                term = await ask("Search (empty clears)", default=c.query)
                show_products(c.search(term))

            elif choice == "3":
                await fill_form(c, c.add_requested(), "Add Product")
                show_products(c.view())

            elif choice == "4":
                pid = await pick_product(c)
                if pid:
                    await fill_form(c, c.edit_requested(pid), "Edit Product")
                    show_products(c.view())

            elif choice == "5":
                pid = await pick_product(c)
                if pid and Confirm.ask("Delete this product?"):
                    outcome = await with_spinner(c.delete_requested(pid))
                    report(outcome, "Product deleted")
                    show_products(c.view())

            elif choice.lower() in ("q", "quit", "exit"):
                console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
                return

            console.print()
            console.rule(style="dim")


def run():
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    try:
        asyncio.run(menu())
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    run()
