"""Utility modules for the FastSpring checkout sheet."""
from fscheckout.utils.logger import ComponentLogger, set_session_id

__all__ = ["ComponentLogger", "set_session_id"]
