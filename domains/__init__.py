"""Domain modules for Hetzner Traffic Guard."""
