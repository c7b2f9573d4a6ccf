from fastapi import FastAPI

from pagestream.api.generator import ItemsGenerator
from pagestream.api.routes import router
from pagestream.core.config import settings


def create_app(
    total_items: int | None = None,
    min_latency: float | None = None,
    max_latency: float | None = None,
) -> FastAPI:
    """
    Create the mock page server

    Unset arguments fall back to the MOCK_* settings.
    """
    generator = ItemsGenerator(
        total_items=settings.MOCK_TOTAL_ITEMS if total_items is None else total_items,
        min_latency=settings.MOCK_MIN_LATENCY if min_latency is None else min_latency,
        max_latency=settings.MOCK_MAX_LATENCY if max_latency is None else max_latency,
    )

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} mock server",
        description="Serves generated items one bounded page at a time",
        version=settings.VERSION,
    )
    app.state.items_generator = generator
    app.include_router(router, prefix=settings.API_V1_STR, tags=["items"])

    return app
