"""Adapters between the core and the outside world (httpx, files)."""
