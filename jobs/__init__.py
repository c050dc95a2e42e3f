"""Scheduled jobs."""

from .traffic_check import register_traffic_check, traffic_check

__all__ = ["register_traffic_check", "traffic_check"]
