# vending/config.py
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Tuple

from rich.logging import RichHandler

# (name, quantity, price)
DEFAULT_PRODUCTS: List[Tuple[str, int, float]] = [
    ("Coca-Cola", 5, 1.5),
    ("Snickers", 3, 1.0),
    ("Water", 10, 0.75),
    ("Chips", 0, 2.25),
]

DEFAULT_COINS: Dict[float, int] = {
    5.0: 2,
    3.0: 2,
    2.0: 5,
    1.0: 10,
    0.5: 10,
    0.25: 20,
}


@dataclass(frozen=True)
class Settings:
    api_url: str = "http://127.0.0.1:8085"
    log_level: str = "WARNING"
    seed: bool = True


def load_settings() -> Settings:
    return Settings(
        api_url=os.getenv("VENDING_API_URL", Settings.api_url).rstrip("/"),
        log_level=os.getenv("VENDING_LOG_LEVEL", Settings.log_level).upper(),
        seed=os.getenv("VENDING_SEED", "1").strip().lower() not in ("0", "false", "no", ""),
    )


def configure_logging(level="WARNING") -> None:
    """Install a rich handler on the root logger unless one is already configured."""
    root = logging.getLogger()
    if root.handlers:
        return
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def seed_machine(machine, products=None, coins=None):
    """Stock the machine with the default catalog and coin float."""
    for name, quantity, price in (products if products is not None else DEFAULT_PRODUCTS):
        machine.add_product(name, quantity, price)
    for denomination, count in (coins if coins is not None else DEFAULT_COINS).items():
        machine.add_coin(denomination, count)
    return machine
