from typing import Dict

# Query parameter names on the wire
START_PARAM = "start"
COUNT_PARAM = "count"
PAGE_NUMBER_PARAM = "page_number"

# Mock page server
MOCK_ITEM_PREFIX = "Item number: "
MOCK_END_OF_PAGES_MESSAGE = "That's all folks"
MOCK_BASE_URL = "http://mock"

DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
}

LOADING_ROW_TEXT = "Loading more…"
