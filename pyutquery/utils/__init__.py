"""
pyutquery Utilities - Utility functions and helpers
"""

from .logging_config import ModuleLogger, configure_logging

__all__ = [
    'ModuleLogger',
    'configure_logging',
]
