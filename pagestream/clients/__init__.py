from .http import PageClient

__all__ = ["PageClient"]
