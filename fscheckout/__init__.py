"""
FastSpring checkout sheet.

Runs a FastSpring embedded checkout in a content surface and reports
the licenses the customer bought.
"""
from fscheckout.layers.checkout_controller import (
    CheckoutController,
    CheckoutPreconditionError,
    CheckoutState,
)
from fscheckout.layers.result_parser import ResultParser
from fscheckout.generators.page_builder import PageBuilder
from fscheckout.models.license import (
    CheckoutRequest,
    ErrorKind,
    Failure,
    LicenseRecord,
    NoResult,
    Success,
)

__all__ = [
    "CheckoutController",
    "CheckoutPreconditionError",
    "CheckoutState",
    "ResultParser",
    "PageBuilder",
    "CheckoutRequest",
    "ErrorKind",
    "Failure",
    "LicenseRecord",
    "NoResult",
    "Success",
]
