"""Bounded accumulation of filtered records across pages."""

from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import Any

from .filters import FilterPipeline


async def collect(
    pages: AsyncGenerator[list[Any], None], pipeline: FilterPipeline, limit: int
) -> list[Any]:
    """Pull pages in order, keep records that pass the pipeline, stop at limit.

    At most one page plus the accumulator is held at a time. Returning fewer
    than ``limit`` records is valid when the source runs dry. Errors raised
    by the page source propagate unchanged.

    Args:
        pages: Async iterator yielding one list of records per page
        pipeline: Filters applied to every record of each page
        limit: Maximum number of records to return

    Returns:
        Up to ``limit`` records in source order
    """
    if limit <= 0:
        raise ValueError(f"limit must be greater than 0, got {limit}")

    collected: list[Any] = []

    async with aclosing(pages) as page_iter:
        async for page in page_iter:
            collected.extend(pipeline.apply(page))

            if len(collected) >= limit:
                return collected[:limit]

    return collected
