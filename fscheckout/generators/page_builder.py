"""
Page Builder for the FastSpring checkout sheet.
Generates the HTML document that hosts the embedded Store Builder
checkout, preconfigured for one product.
"""
from typing import Optional

from fscheckout.config import config
from fscheckout.models.license import CheckoutRequest
from fscheckout.utils.logger import ComponentLogger


# Container the Store Builder Library renders the embedded checkout into
EMBEDDED_CONTAINER_ID = "fsc-embedded-checkout-container"


class PageBuilder:
    """
    Builds the checkout page for a storefront/product/quantity.

    The page is meant to be loaded without a base URL, so the surface
    can tell this synthetic document apart from a real provider page.

    Note: arguments are NOT escaped in any way. Storefront and product
    path end up inside HTML attributes and a JavaScript string literal
    as-is, callers must pass trusted identifiers.
    """

    def __init__(self, sbl_url: Optional[str] = None):
        self.sbl_url = sbl_url or config.SBL_URL
        self.logger = ComponentLogger("page_builder")

    def build(self, store_front: str, product_path: str, quantity: int = 1) -> str:
        """
        Build the checkout page.

        Args:
            store_front: The storefront, e.g. "zeezide.onfastspring.com/embedded"
            product_path: The (internal) product name, e.g. "soy-for-community-slacks"
            quantity: The product quantity to preconfigure

        Returns:
            A complete HTML document
        """
        self.logger.log_action(
            "page_build",
            "started",
            store_front=store_front,
            product_path=product_path,
            quantity=quantity
        )

        page = f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Checkout</title>
    <script
      id="fsc-api"
      src="{self.sbl_url}"
      type="text/javascript"
      data-storefront="{store_front}"
      data-continuous="true">
    </script>
  </head>
  <body>
    <div id="{EMBEDDED_CONTAINER_ID}"></div>
    <script type="text/javascript">
      fastspring.builder.push({{
        products: [ {{ path: "{product_path}", quantity: {quantity} }} ],
        checkout: true
      }});
    </script>
  </body>
</html>
"""

        self.logger.log_action(
            "page_build",
            "completed",
            store_front=store_front,
            product_path=product_path,
            page_length=len(page)
        )
        return page

    def build_for(self, request: CheckoutRequest) -> str:
        """Build the checkout page for a validated request."""
        return self.build(request.store_front, request.product_path, request.quantity)
