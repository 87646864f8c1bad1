"""Page arithmetic shared by list endpoints."""

import math
from dataclasses import dataclass

from recipe_planner.domain.errors import InvalidInput


@dataclass(frozen=True)
class Pagination:
    """Page metadata for list endpoints."""

    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page * self.limit < self.total_count

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def page_offset(page: int, limit: int, max_page_size: int) -> int:
    """Validate paging parameters and return the row offset."""
    if page < 1:
        raise InvalidInput("page must be at least 1")
    if limit < 1 or limit > max_page_size:
        raise InvalidInput(f"limit must be between 1 and {max_page_size}")
    return (page - 1) * limit
