"""Configuration module for webhook-callbacks."""

from webhook_callbacks.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
