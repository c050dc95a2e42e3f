"""Traffic domain services."""

from .hetzner import HetznerClient

__all__ = ["HetznerClient"]
