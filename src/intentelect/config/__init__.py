"""Configuration for the election pipeline and its batch runner."""

from .settings import (
    Settings,
    ElectionSettings,
    ProcessingSettings,
    LoggingSettings,
    LogLevel,
    ZeroSumPolicy,
    get_settings,
    set_settings,
)

__all__ = [
    "Settings",
    "ElectionSettings",
    "ProcessingSettings",
    "LoggingSettings",
    "LogLevel",
    "ZeroSumPolicy",
    "get_settings",
    "set_settings",
]
