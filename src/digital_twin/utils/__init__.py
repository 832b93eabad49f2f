"""
Utility modules.
"""

from digital_twin.utils.config import Settings, load_settings
from digital_twin.utils.logging import get_logger, set_log_level

__all__ = [
    "Settings",
    "load_settings",
    "get_logger",
    "set_log_level",
]
