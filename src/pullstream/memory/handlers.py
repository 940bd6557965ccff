"""Handlers reacting to memory pressure reported by collectors."""

import time
import logging
from typing import Dict, Optional

from pullstream.memory.monitor import (
    MemoryPressureHandler,
    MemoryPressureLevel,
    MemoryInfo
)


class LoggingHandler(MemoryPressureHandler):
    """Log memory pressure events."""

    def __init__(self,
                 logger: Optional[logging.Logger] = None,
                 min_level: MemoryPressureLevel = MemoryPressureLevel.MEDIUM,
                 quiet_period: float = 60.0):
        self.logger = logger or logging.getLogger(__name__)
        self.min_level = min_level
        self.quiet_period = quiet_period
        self._last_log: Dict[MemoryPressureLevel, float] = {}

    def can_handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> bool:
        return level >= self.min_level

    def handle(self, level: MemoryPressureLevel, info: MemoryInfo) -> None:
        # One record per level per quiet period, however often collectors check
        last_time = self._last_log.get(level)
        if last_time is not None and time.time() - last_time < self.quiet_period:
            return

        self._last_log[level] = time.time()

        if level == MemoryPressureLevel.CRITICAL:
            self.logger.critical("CRITICAL memory pressure while collecting: %s", info)
        elif level == MemoryPressureLevel.HIGH:
            self.logger.error("HIGH memory pressure while collecting: %s", info)
        elif level == MemoryPressureLevel.MEDIUM:
            self.logger.warning("MEDIUM memory pressure while collecting: %s", info)
        else:
            self.logger.info("Memory pressure while collecting: %s", info)
