"""
Helpers for mixing plain values and awaitables
"""

import asyncio
import inspect
from collections.abc import Mapping
from typing import Any, Dict, List, Union


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def promise_from(value: Any) -> "asyncio.Future[Any]":
    """Wrap <value> in a future; awaitables are awaited first"""
    if inspect.isawaitable(value):
        return asyncio.ensure_future(_resolve(value))
    future = asyncio.get_running_loop().create_future()
    future.set_result(value)
    return future


async def resolve_promises(items: Union[List[Any], Dict[Any, Any]]) -> Union[List[Any], Dict[Any, Any]]:
    """
    Resolve all values in <items>, which need not all be awaitables

    Lists resolve to a list in the same order, mappings to a dict with the
    same keys. The first failure is raised.
    """
    if isinstance(items, Mapping):
        keys = list(items.keys())
        results = await asyncio.gather(*(_resolve(items[key]) for key in keys))
        return dict(zip(keys, results))
    return list(await asyncio.gather(*(_resolve(item) for item in items)))
