"""Configuration adapters."""

from rail_ticketing.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
