"""Layers package initialization."""
from fscheckout.layers.result_parser import ResultParser
from fscheckout.layers.checkout_controller import (
    CheckoutController,
    CheckoutPreconditionError,
    CheckoutState,
)

__all__ = [
    "ResultParser",
    "CheckoutController",
    "CheckoutPreconditionError",
    "CheckoutState",
]
