"""Runtime services: telemetry and configuration."""

from . import telemetry
from .config import ShiftSelectConfig, load_config

__all__ = ["telemetry", "ShiftSelectConfig", "load_config"]
