# vending/errors.py


class VendingError(Exception):
    """Base error for the vending engine"""


class InvalidInput(VendingError, ValueError):
    """A caller broke a precondition (unknown coin, bad amount, product not available)"""


class InsufficientChange(VendingError):
    """No greedy decomposition of the change exists for the current coin pool"""

    def __init__(self, target_sum=None):
        self.target_sum = target_sum
        msg = "not enough change"
        if target_sum is not None:
            msg = f"not enough change for {target_sum}"
        super().__init__(msg)
