# cli.py
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from vending.config import configure_logging, load_settings, seed_machine
from vending.errors import InsufficientChange, InvalidInput
from vending.machine import VendingMachine
from vending.models import DENOMINATIONS, CoinBag, Product

console = Console()

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
def show_products(products: List[Product]):
    table = Table(
        title="Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Qty", justify="right", width=8)

    for i, p in enumerate(products, start=1):
        table.add_row(str(i), p.name, f"{p.price:.2f}", str(p.quantity))
    console.print(table)


def format_change(change: CoinBag) -> str:
    if not change:
        return "none"
    return ", ".join(f"{d.value} * {change[d]}" for d in DENOMINATIONS if change[d])


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


# ---------------------------
# Purchase flow
# ---------------------------
def choose_product(machine: VendingMachine) -> Optional[Product]:
    products = machine.available_products()
    show_products(products)
    choices = [str(i) for i in range(1, len(products) + 1)] + [p.name for p in products]
    raw = prompt_with_autocomplete(
        "Please choose a product:",
        completer=WordCompleter(choices, ignore_case=True)
    ).strip()

    for i, p in enumerate(products, start=1):
        if raw == str(i) or raw.lower() == p.name.lower():
            return p
    console.print(f"[red]Unknown product: {raw}[/red]")
    return None


def select_product(machine: VendingMachine):
    product = choose_product(machine)
    if product is None:
        return
    if Confirm.ask(f"\nYou have selected: {product.label(with_price=True)}. Proceed to checkout?"):
        machine.select_product(product)


def collect_coin(machine: VendingMachine):
    coins = [str(d.value) for d in DENOMINATIONS]
    raw = prompt_with_autocomplete(
        f"\nInserted amount: {machine.inserted_sum()}. "
        f"Please insert a coin (available coins: {', '.join(coins)}):",
        completer=WordCompleter(coins)
    ).strip()
    try:
        machine.insert_coin(raw)
    except InvalidInput:
        console.print(f"[red]Not a valid coin: {raw}[/red]")


def confirm_purchase(machine: VendingMachine):
    try:
        change = machine.confirm_purchase()
    except InsufficientChange:
        console.print(Panel.fit(
            "[red]There is not enough change. Please take your money back.[/red]",
            title="Purchase failed"
        ))
        return
    console.print(Panel.fit(
        f"[green]Purchase is successful.[/green] Your change: {format_change(change)}",
        title="Purchase"
    ))


def run(machine: VendingMachine):
    console.print("Welcome! Press Ctrl+C to exit.\n")
    if machine.available_products_empty():
        console.print("There are no available products. Please come back later.")
        sys.exit(0)

    try:
        while True:
            while machine.current_product is None:
                if machine.available_products_empty():
                    console.print("There are no available products. Please come back later.")
                    sys.exit(0)
                select_product(machine)
            while not machine.has_sufficient_funds():
                collect_coin(machine)
            confirm_purchase(machine)
            console.rule(style="dim")
    except (KeyboardInterrupt, EOFError):
        console.print("\nGood bye!")


if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings.log_level)
    machine = VendingMachine()
    if settings.seed:
        seed_machine(machine)
    run(machine)
