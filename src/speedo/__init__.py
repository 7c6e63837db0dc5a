"""speedo - rate and progress speedometers for long-running jobs."""

__version__ = "0.1.0"

from speedo.errors import ConfigurationError, SpeedoError
from speedo.metrics import InstrumentInfo, Mode, SpeedStat
from speedo.speedometer import (
    Config,
    Speedometer,
    new_progress_speedometer,
    new_speedometer,
    new_variation_speedometer,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "InstrumentInfo",
    "Mode",
    "SpeedStat",
    "Speedometer",
    "SpeedoError",
    "new_progress_speedometer",
    "new_speedometer",
    "new_variation_speedometer",
]
