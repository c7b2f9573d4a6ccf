from fastapi import Request

from pagestream.api.generator import ItemsGenerator


def get_items_generator(request: Request) -> ItemsGenerator:
    """Get the items generator from the application state"""
    return request.app.state.items_generator
