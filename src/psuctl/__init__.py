"""psuctl — Portainer stack utilities CLI."""

__version__ = "0.1.0"
