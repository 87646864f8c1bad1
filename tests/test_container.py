"""Tests for container wiring."""

import asyncio

from recipe_planner.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.shopping_list_service is not None
    assert container.substitution_service is not None
    assert container.catalog_service.max_page_size == settings.max_page_size
    assert container.shopping_list_service.max_page_size == settings.max_page_size
    asyncio.run(container.close_resources())
