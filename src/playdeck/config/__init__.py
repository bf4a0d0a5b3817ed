"""Configuration module for PlayDeck."""

from .settings import (
    CatalogSettings,
    LogSettings,
    PlayerSettings,
    Settings,
    get_settings,
)

__all__ = [
    "CatalogSettings",
    "LogSettings",
    "PlayerSettings",
    "Settings",
    "get_settings",
]
