from .binding import ListBinding, Row

__all__ = ["ListBinding", "Row"]
