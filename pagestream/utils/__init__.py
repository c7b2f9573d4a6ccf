from .query import (
    build_page_url,
    decode_offset_query,
    decode_page_number_query,
    encode_offset_query,
    encode_page_number_query,
)

__all__ = [
    "build_page_url",
    "decode_offset_query",
    "decode_page_number_query",
    "encode_offset_query",
    "encode_page_number_query",
]
