from typing import Dict, Mapping, Tuple

import httpx

from pagestream.constants import (
    COUNT_PARAM,
    PAGE_NUMBER_PARAM,
    START_PARAM,
)
from pagestream.models.page import PageRequest


def encode_offset_query(request: PageRequest) -> Dict[str, str]:
    """
    Encode an offset-counting request into query parameters

    Args:
        request: The page request to encode

    Returns:
        A dictionary with the `start` and `count` query parameters
    """
    return {
        START_PARAM: str(request.start),
        COUNT_PARAM: str(request.count),
    }


def decode_offset_query(params: Mapping[str, str]) -> PageRequest:
    """
    Decode offset-counting query parameters into a page request

    Raises:
        ValueError: If a parameter is missing or not a valid integer
    """
    try:
        return PageRequest(
            start=int(params[START_PARAM]),
            count=int(params[COUNT_PARAM]),
        )
    except (KeyError, ValueError) as e:
        raise ValueError(f"Invalid offset query: {str(e)}")


def encode_page_number_query(page_number: int, page_size: int) -> Dict[str, str]:
    """
    Encode a page-counting request into query parameters

    Args:
        page_number: The 1-based page number
        page_size: The number of items per page

    Returns:
        A dictionary with the `count` and `page_number` query parameters
    """
    if page_number < 1:
        raise ValueError(f"Page number must be positive, got {page_number}")
    if page_size < 1:
        raise ValueError(f"Page size must be positive, got {page_size}")

    return {
        COUNT_PARAM: str(page_size),
        PAGE_NUMBER_PARAM: str(page_number),
    }


def decode_page_number_query(params: Mapping[str, str]) -> Tuple[int, int]:
    """
    Decode page-counting query parameters

    Returns:
        A tuple of (page_number, page_size)

    Raises:
        ValueError: If a parameter is missing or invalid
    """
    try:
        page_number = int(params[PAGE_NUMBER_PARAM])
        page_size = int(params[COUNT_PARAM])
    except (KeyError, ValueError) as e:
        raise ValueError(f"Invalid page number query: {str(e)}")

    if page_number < 1 or page_size < 1:
        raise ValueError(
            f"Invalid page number query: page {page_number}, size {page_size}"
        )
    return page_number, page_size


def build_page_url(base_url: str, endpoint: str, params: Mapping[str, str]) -> str:
    """Join the endpoint onto the base URL and attach the query parameters"""
    url = httpx.URL(base_url).join(endpoint)
    return str(url.copy_merge_params(dict(params)))
