"""Runtime configuration for scicalc.

Settings are read from ``SCICALC_*`` environment variables with defaults, so the
CLI and embedding applications can pick an angle mode or log level without
code changes. Display thresholds are fixed module constants.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from scicalc.models import AngleMode

logger = logging.getLogger(__name__)

# Display policy: scientific notation outside [SCIENTIFIC_LOWER, SCIENTIFIC_UPPER).
SCIENTIFIC_UPPER = 1e12
SCIENTIFIC_LOWER = 1e-9
SCIENTIFIC_DIGITS = 9
SIGNIFICANT_DIGITS = 15

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Environment-derived defaults."""

    angle_mode: AngleMode = AngleMode.RADIANS
    log_level: str = "WARNING"
    sample_steps: int = 20

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from SCICALC_ANGLE_MODE, SCICALC_LOG_LEVEL, SCICALC_SAMPLE_STEPS.

        Unparseable values are ignored with a warning and the default is kept.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        raw_mode = env.get("SCICALC_ANGLE_MODE")
        if raw_mode:
            try:
                settings.angle_mode = AngleMode(raw_mode.strip().lower())
            except ValueError:
                logger.warning("Ignoring SCICALC_ANGLE_MODE=%r (expected radians or degrees)", raw_mode)

        raw_level = env.get("SCICALC_LOG_LEVEL")
        if raw_level:
            level = raw_level.strip().upper()
            if level in _LOG_LEVELS:
                settings.log_level = level
            else:
                logger.warning("Ignoring SCICALC_LOG_LEVEL=%r", raw_level)

        raw_steps = env.get("SCICALC_SAMPLE_STEPS")
        if raw_steps:
            try:
                steps = int(raw_steps)
                if steps < 1:
                    raise ValueError(raw_steps)
                settings.sample_steps = steps
            except ValueError:
                logger.warning("Ignoring SCICALC_SAMPLE_STEPS=%r (expected a positive integer)", raw_steps)

        return settings
