"""
The content script that reports the checkout result back to the host.

Contract: fires once per completed page load (readyState "complete"),
in the top level frame only, and posts the text of the `#viewdata`
container through the `fscheckoutPostMessage` channel. It does not
parse anything.
"""
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

SCRIPT_VERSION = 2
SCRIPT_ASSET = "find_licenses.js"

# Name of the function the script calls to hand the payload to the host
CHANNEL_NAME = "fscheckoutPostMessage"

# DOM id of the container holding the order view data
VIEWDATA_CONTAINER_ID = "viewdata"


@dataclass(frozen=True)
class ExtractionScript:
    """The versioned script asset plus its injection parameters."""
    source: str
    version: int = SCRIPT_VERSION
    channel: str = CHANNEL_NAME
    injection_time: str = "document_start"
    main_frame_only: bool = True


@lru_cache(maxsize=1)
def load_extraction_script() -> ExtractionScript:
    """Load the script asset shipped with the package."""
    source = (
        resources.files("fscheckout.assets")
        .joinpath(SCRIPT_ASSET)
        .read_text(encoding="utf-8")
    )
    return ExtractionScript(source=source)
