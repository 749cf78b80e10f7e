#!/usr/bin/env python3
"""
cli.py
------
Shared CLI utilities and statistics for Timeless commands.

Functions:
    setup_logger: Initialize TimelessLogger for CLI operations

Classes:
    ConversionStats: Counters for diary/JSON conversions

Usage:
    from timeless.core.cli import setup_logger, ConversionStats

    logger = setup_logger(log_dir, "diary")
    stats = ConversionStats()
    stats.days_written += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from timeless.core.logging_manager import TimelessLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> TimelessLogger:
    """
    Setup logging for CLI operations.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'diary')

    Returns:
        Configured TimelessLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return TimelessLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ConversionStats:
    """
    Counters for one diary <-> JSON conversion.

    A failed conversion raises instead of returning stats, so there is
    no error counter.

    Attributes:
        files_processed: Output files written (0 on --dry-run)
        days_written: Days present in the output
        events_written: Events present in the output
        days_skipped: Input days dropped (bad key or no non-empty events)
        timestamp: lastSavedTimestamp written to the output
        start_time: When the conversion started
    """
    files_processed: int = 0
    days_written: int = 0
    events_written: int = 0
    days_skipped: int = 0
    timestamp: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("files_processed", "days_written", "events_written", "days_skipped"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def duration(self) -> float:
        """Seconds elapsed since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.files_processed} files processed, "
            f"{self.days_written} days, "
            f"{self.events_written} events, "
            f"{self.days_skipped} skipped, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output and log details."""
        return {
            "files_processed": self.files_processed,
            "days_written": self.days_written,
            "events_written": self.events_written,
            "days_skipped": self.days_skipped,
            "timestamp": self.timestamp,
            "duration": self.duration(),
        }
