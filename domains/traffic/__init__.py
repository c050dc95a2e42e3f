"""Traffic domain - Hetzner outbound traffic monitoring and kill switch."""

from .config import SUMMARY_SLOT, TrafficSettings, load_settings
from .monitor import CycleResult, TrafficMonitor

__all__ = ["SUMMARY_SLOT", "TrafficSettings", "load_settings", "CycleResult", "TrafficMonitor"]
