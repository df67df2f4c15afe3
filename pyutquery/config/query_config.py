"""
Query Configuration - Settings for a query session
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any

from ..protocol.constants import (
    DEFAULT_ENCODING, DEFAULT_POLL_INTERVAL, DEFAULT_QUERY_PORT,
    DEFAULT_TIMEOUT, MAX_DATAGRAM_SIZE,
)
from .validation import (
    ConfigValidationError, validate_buffer_size, validate_encoding,
    validate_port, validate_timeout,
)


@dataclass
class QueryConfig:
    """Query session configuration settings"""

    # Connection settings
    default_port: int = DEFAULT_QUERY_PORT
    timeout: float = DEFAULT_TIMEOUT  # Deadline for each reply
    poll_interval: float = DEFAULT_POLL_INTERVAL  # How often a wait checks for cancellation

    # Decoding
    buffer_size: int = MAX_DATAGRAM_SIZE
    encoding: str = DEFAULT_ENCODING

    # Logging
    log_level: str = "INFO"
    log_packets: bool = False

    def validate(self) -> 'QueryConfig':
        """Check every setting, raising ConfigValidationError on the first bad one"""
        validate_port(self.default_port)
        validate_timeout(self.timeout)
        validate_timeout(self.poll_interval, "Poll interval")
        validate_buffer_size(self.buffer_size)
        validate_encoding(self.encoding)

        if logging.getLevelName(str(self.log_level).upper()) not in (
                logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            raise ConfigValidationError(f"Unknown log level: {self.log_level!r}")

        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'default_port': self.default_port,
            'timeout': self.timeout,
            'poll_interval': self.poll_interval,
            'buffer_size': self.buffer_size,
            'encoding': self.encoding,
            'log_level': self.log_level,
            'log_packets': self.log_packets,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QueryConfig':
        """Create from dictionary"""
        return cls(**data)

    def update(self, **kwargs):
        """Update configuration values"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
