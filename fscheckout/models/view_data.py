"""
Payload schema for the checkout page's `viewdata` container.

Only the fields the parser needs are modelled; everything else the
provider puts into the document is ignored. Strict types are used so
that e.g. a numeric license code is a schema error, not a coercion.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, StrictStr


class PayloadModel(BaseModel):
    """Base class for all view data nodes."""
    model_config = ConfigDict(extra="ignore", frozen=True)


class License(PayloadModel):
    """A generated license inside a fulfillment."""
    code: StrictStr


class Fulfillment(PayloadModel):
    """Fulfillment of an order item."""
    licenses: List[License]


class Item(PayloadModel):
    """Order item. Items without a fulfillment carry no licenses."""
    fulfillment: Optional[Fulfillment] = None


class Group(PayloadModel):
    """Group of order items."""
    items: List[Item]


class Order(PayloadModel):
    """The order shown on the page."""
    groups: List[Group]


class ViewData(PayloadModel):
    """
    Top level of the payload.

    `debtorName` is only present once the checkout produced a
    completed order.
    """
    debtorName: Optional[StrictStr] = None
    order: Order

    def license_codes(self) -> List[str]:
        """Flatten groups -> items -> licenses into codes, in document order."""
        return [
            license.code
            for group in self.order.groups
            for item in group.items
            if item.fulfillment is not None
            for license in item.fulfillment.licenses
        ]
