"""
Configuration management for pipeline operations.
"""

from typing import ClassVar, Optional
from dataclasses import dataclass, field
import psutil


@dataclass
class StreamConfig:
    """Global configuration for pipeline operations."""

    # Resident memory the process may hold before collectors report pressure
    memory_limit: int = field(default_factory=lambda: int(psutil.virtual_memory().total * 0.8))

    # Collectors check memory pressure every N collected elements
    enable_memory_checks: bool = True
    memory_check_interval: int = 10_000

    # Channel-backed sources wake up this often while blocked
    channel_poll_interval: float = 0.1  # seconds

    _instance: ClassVar[Optional['StreamConfig']] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.memory_check_interval < 1:
            raise ValueError("memory_check_interval must be positive")
        if self.channel_poll_interval <= 0:
            raise ValueError("channel_poll_interval must be positive")

    @classmethod
    def get_instance(cls) -> 'StreamConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values; invalid values leave it unchanged."""
        instance = cls.get_instance()
        previous = {}
        for key, value in kwargs.items():
            if hasattr(instance, key):
                previous[key] = getattr(instance, key)
                setattr(instance, key, value)
        try:
            instance.validate()
        except ValueError:
            for key, value in previous.items():
                setattr(instance, key, value)
            raise

    def format_bytes(self, bytes: int) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes < 1024.0:
                return f"{bytes:.2f} {unit}"
            bytes /= 1024.0
        return f"{bytes:.2f} PB"


# Global configuration instance
config = StreamConfig.get_instance()
