import asyncio
from typing import Dict

from .config import load_settings, seed_machine
from .machine import VendingMachine

# This file holds the shared in-memory machine and the concurrency locks.

MACHINES: Dict[str, VendingMachine] = {}
_LOCKS: Dict[str, asyncio.Lock] = {}

def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]

def get_machine() -> VendingMachine:
    if "default" not in MACHINES:
        machine = VendingMachine()
        if load_settings().seed:
            seed_machine(machine)
        MACHINES["default"] = machine
    return MACHINES["default"]

def reset_machine(seed: bool = True) -> VendingMachine:
    machine = VendingMachine()
    if seed:
        seed_machine(machine)
    MACHINES["default"] = machine
    _LOCKS.clear()
    return machine
