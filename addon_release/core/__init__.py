"""Core types shared by every layer."""

from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok
from .settings import Settings, SettingsError, load_settings, load_settings_or_default

__all__ = [
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
    # settings
    "Settings",
    "SettingsError",
    "load_settings",
    "load_settings_or_default",
]
