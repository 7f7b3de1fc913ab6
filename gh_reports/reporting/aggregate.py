"""Settle-all fan-out of independent report facets."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

FacetFetcher = Callable[[], Awaitable[list[Any]]]


async def _fetch(fetcher: FacetFetcher) -> list[Any]:
    return list(await fetcher())


async def aggregate(fetchers: Mapping[str, FacetFetcher]) -> dict[str, list[Any]]:
    """Run every facet fetcher concurrently and wait for all of them.

    A fetcher that raises contributes an empty list to its slot; sibling
    facets keep their values and are never cancelled.

    Args:
        fetchers: Facet name mapped to a zero-argument coroutine function

    Returns:
        Facet name mapped to that facet's results
    """
    names = list(fetchers)
    tasks = [asyncio.create_task(_fetch(fetchers[name])) for name in names]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    aggregated: dict[str, list[Any]] = {}
    failed = 0
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            logger.warning(f"Facet '{name}' failed, rendering it as empty: {result}")
            aggregated[name] = []
            failed += 1
        else:
            aggregated[name] = result

    logger.debug(f"Aggregated {len(names)} facet(s), {failed} failed")
    return aggregated
