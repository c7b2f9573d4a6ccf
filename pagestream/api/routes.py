from fastapi import APIRouter, Depends, HTTPException, Query

from pagestream.api.dependencies import get_items_generator
from pagestream.api.generator import EndOfPagesError, ItemsGenerator
from pagestream.constants import MOCK_END_OF_PAGES_MESSAGE
from pagestream.core.logging import LogContext
from pagestream.models.page import OffsetPageResponseDTO, PageResponseDTO

logger = LogContext(__name__)
router = APIRouter()


@router.get("/items", response_model=OffsetPageResponseDTO)
async def get_items(
    start: int = Query(ge=0),
    count: int = Query(gt=0),
    generator: ItemsGenerator = Depends(get_items_generator),
) -> OffsetPageResponseDTO:
    """
    Serve a page in offset-counting form

    Args:
        start: Offset of the first item (0-based)
        count: Number of items requested
    """
    await generator.simulate_latency()
    page = generator.offset_page(start, count)
    logger.debug(
        "Served offset page",
        extra={"start": start, "requested": count, "served": page.count},
    )
    return page


@router.get("/pages", response_model=PageResponseDTO)
async def get_pages(
    count: int = Query(gt=0),
    page_number: int = Query(ge=1),
    generator: ItemsGenerator = Depends(get_items_generator),
) -> PageResponseDTO:
    """
    Serve a page in page-counting form

    Args:
        count: Page size
        page_number: 1-based page number
    """
    await generator.simulate_latency()
    try:
        page = generator.page_number_page(page_number, count)
    except EndOfPagesError as e:
        logger.info("Page past the end requested", extra={"detail": str(e)})
        raise HTTPException(status_code=404, detail=MOCK_END_OF_PAGES_MESSAGE)

    logger.debug(
        "Served numbered page",
        extra={"page_number": page_number, "served": len(page.items)},
    )
    return page
