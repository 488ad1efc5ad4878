"""
License and checkout models for the FastSpring checkout sheet.
These are the values the host hands in and gets back; the page
payload schema lives in view_data.py.
"""
from typing import List, Union
from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class LicenseRecord(BaseModel):
    """
    A purchased license.

    - sku: the product SKU (empty when the payload has no per-line SKU)
    - name: the license name, i.e. the purchaser's display name
    - code: the license code generated by the checkout provider
    """
    model_config = ConfigDict(frozen=True)

    sku: str = ""
    name: str
    code: str


class CheckoutRequest(BaseModel):
    """
    Product, storefront and quantity to preconfigure the checkout with.

    Values are embedded into the checkout page verbatim, callers must
    supply trusted identifiers.
    """
    product_path: str
    store_front: str
    quantity: int = Field(default=1, ge=1)


class ErrorKind(str, Enum):
    """Why a page payload could not be turned into license records."""
    INVALID_PAYLOAD_TYPE = "invalid_payload_type"  # payload not a string
    ENCODING_ERROR = "encoding_error"              # string not encodable as UTF-8
    MALFORMED_STRUCTURE = "malformed_structure"    # JSON doesn't match ViewData


@dataclass(frozen=True)
class NoResult:
    """The page has no completed order yet. Not an error."""


@dataclass(frozen=True)
class Success:
    """Licenses bought in this checkout (possibly none)."""
    records: List[LicenseRecord] = field(default_factory=list)


@dataclass(frozen=True)
class Failure:
    """The payload could not be parsed."""
    kind: ErrorKind
    detail: str = field(default="", compare=False)


ParseOutcome = Union[NoResult, Success, Failure]
CheckoutResult = Union[Success, Failure]
