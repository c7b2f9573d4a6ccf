from .page import Page, PageRequest, PageResponseDTO, OffsetPageResponseDTO

__all__ = [
    "Page",
    "PageRequest",
    "PageResponseDTO",
    "OffsetPageResponseDTO",
]
