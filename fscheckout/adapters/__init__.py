"""Adapters package initialization."""
from fscheckout.adapters.channel import MessageChannel, LocalMessageChannel
from fscheckout.adapters.surface import ContentSurface, is_synthetic_url

__all__ = ["MessageChannel", "LocalMessageChannel", "ContentSurface", "is_synthetic_url"]
