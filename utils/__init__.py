"""Utility modules for Hetzner Traffic Guard."""

from .log_sanitizer import mask_token, sanitize_log, sanitize_for_log

__all__ = ["mask_token", "sanitize_log", "sanitize_for_log"]
