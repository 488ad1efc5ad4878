"""
Configuration management for the FastSpring checkout sheet.
Handles environment variables and surface settings.
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = os.getenv("FSCHECKOUT_LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("FSCHECKOUT_LOG_FORMAT", "json")  # json or console

    # Store Builder Library script embedded into the checkout page
    SBL_URL: str = os.getenv(
        "FSCHECKOUT_SBL_URL",
        "https://sbl.onfastspring.com/sbl/0.8.5/fastspring-builder.min.js",
    )

    # Content surface (Playwright)
    BROWSER: str = os.getenv("FSCHECKOUT_BROWSER", "webkit")
    HEADLESS: bool = os.getenv("FSCHECKOUT_HEADLESS", "false").lower() == "true"
    VIEWPORT_WIDTH: int = int(os.getenv("FSCHECKOUT_VIEWPORT_WIDTH", "1024"))
    VIEWPORT_HEIGHT: int = int(os.getenv("FSCHECKOUT_VIEWPORT_HEIGHT", "768"))

    # How long to wait for a popup to reveal its target before giving up
    POPUP_TIMEOUT_MS: int = int(os.getenv("FSCHECKOUT_POPUP_TIMEOUT_MS", "5000"))

    # Optional browser executable override (e.g. a system Chrome)
    BROWSER_CHANNEL: Optional[str] = os.getenv("FSCHECKOUT_BROWSER_CHANNEL")

    SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

    @classmethod
    def viewport(cls) -> dict:
        """Return the viewport size in the shape Playwright expects."""
        return {"width": cls.VIEWPORT_WIDTH, "height": cls.VIEWPORT_HEIGHT}


config = Config()
