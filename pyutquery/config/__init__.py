"""
Configuration system for pyutquery
"""

from .query_config import QueryConfig
from .validation import ConfigValidationError

__all__ = ['QueryConfig', 'ConfigValidationError']
