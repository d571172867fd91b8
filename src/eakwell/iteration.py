"""
Collection helpers for sequences and mappings

Sequences hand ``(item, index)`` to callbacks, mappings hand
``(value, key)``. Helpers that filter keep the container kind: a list in,
a list out; a dict in, a dict out.
"""

import random
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

Items = Union[List[Any], Tuple[Any, ...], Dict[Any, Any]]
KeyFn = Union[Callable[..., Any], str]


def _value_of(item: Any, key: Any, cb_or_name: KeyFn) -> Any:
    if callable(cb_or_name):
        return cb_or_name(item, key)
    if isinstance(item, Mapping):
        return item[cb_or_name]
    return getattr(item, cb_or_name)


def each(items: Items, cb: Callable[..., Any]) -> Any:
    """
    Loop through a sequence or mapping

    Return something truthy from <cb> to stop iteration; that value is
    returned. Otherwise returns False.
    """
    if isinstance(items, Mapping):
        for i, (key, value) in enumerate(items.items()):
            cancel = cb(value, key, i)
            if cancel:
                return cancel
    else:
        for i, item in enumerate(items):
            cancel = cb(item, i)
            if cancel:
                return cancel
    return False


def map_items(items: Items, cb_or_name: KeyFn) -> Items:
    """Copy of <items> with each item replaced by cb(item, key) or item[name]"""
    if isinstance(items, Mapping):
        return {key: _value_of(value, key, cb_or_name) for key, value in items.items()}
    return [_value_of(item, i, cb_or_name) for i, item in enumerate(items)]


def times(n: int, cb: Callable[[int], Any]) -> Any:
    """Call <cb> <n> times, stopping at the first truthy result"""
    for i in range(n):
        value = cb(i)
        if value:
            return value
    return None


def step(start: float, stop: float, steps: int, cb: Callable[[float], Any]) -> Any:
    """Ramp a value from <start> towards <stop> in <steps> steps"""
    return times(steps, lambda i: cb(start + (stop - start) * i / steps))


def invoke(items: Items, name: str, *args: Any) -> List[Any]:
    """Call the named method on each item with <args>"""
    return [getattr(item, name)(*args) for item in values(items)]


def zip_items(items1: Items, items2: Items, cb: Optional[Callable[[Any, Any], Any]] = None) -> List[Tuple[Any, Any]]:
    """
    Pair up the items of two sequences, up to the shorter one's length

    A truthy return from <cb> stops pairing after the current pair.
    """
    out = []
    for item1, item2 in zip(items1, items2):
        out.append((item1, item2))
        if cb and cb(item1, item2):
            break
    return out


def flatten(items: Items) -> List[Any]:
    """Make a flat list from a hierarchy of nested lists"""
    out: List[Any] = []
    for item in values(items):
        if isinstance(item, (list, tuple)):
            out.extend(flatten(item))
        else:
            out.append(item)
    return out


def select(items: Items, cb: Callable[..., Any], limit: Optional[int] = None) -> Items:
    """
    Items for which cb(item, key) holds

    <limit> caps how many items are examined, not how many are kept.
    """
    is_mapping = isinstance(items, Mapping)
    out: Any = {} if is_mapping else []
    pairs = items.items() if is_mapping else enumerate(items)

    for n, (key, item) in enumerate(pairs, 1):
        if cb(item, key):
            if is_mapping:
                out[key] = item
            else:
                out.append(item)
        if limit and n == limit:
            break
    return out


def partition(items: Items, cb: Callable[..., Any]) -> Tuple[Items, Items]:
    """Separate the items for which <cb> holds from those for which it does not"""
    matched = select(items, cb)
    rest = select(items, lambda item, key: not cb(item, key))
    return matched, rest


def min_by(items: Items, cb_or_name: KeyFn) -> Any:
    """Smallest item according to <cb_or_name>, None when empty"""
    best = min(_pairs(items), key=lambda pair: _value_of(pair[1], pair[0], cb_or_name), default=None)
    return None if best is None else best[1]


def max_by(items: Items, cb_or_name: KeyFn) -> Any:
    """Largest item according to <cb_or_name>, None when empty"""
    best = max(_pairs(items), key=lambda pair: _value_of(pair[1], pair[0], cb_or_name), default=None)
    return None if best is None else best[1]


def count(items: Items, cb: Callable[..., Any]) -> int:
    return len(select(items, cb))


def all_match(items: Items, cb: Callable[..., Any]) -> bool:
    return count(items, cb) == size(items)


def any_match(items: Items, cb: Callable[..., Any]) -> bool:
    return any(cb(item, key) for key, item in _pairs(items))


def find(items: Items, cb: Callable[..., Any]) -> Any:
    """First item that matches <cb>, None otherwise"""
    for key, item in _pairs(items):
        if cb(item, key):
            return item
    return None


def last(items: Union[List[Any], Tuple[Any, ...], str]) -> Any:
    return items[-1]


def pick(items: Union[List[Any], Tuple[Any, ...]], n: Optional[int] = None) -> Any:
    """
    Randomly pick a single item, or a list of <n> items

    Each position is picked at most once, so asking for more items than
    there are returns all of them in random order.
    """
    if n is None:
        return random.choice(items)
    pool = list(items)
    return random.sample(pool, min(n, len(pool)))


def contains(items: Any, item: Any) -> Any:
    """
    Check if <item> is a member of a sequence, string or mapping

    For mappings the key under which <item> was found is returned.
    """
    if isinstance(items, Mapping):
        for key, value in items.items():
            if value == item:
                return key
        return False
    return item in items


def remove(items: List[Any], item: Any) -> Optional[List[Any]]:
    """Remove the first occurrence of <item> in place"""
    try:
        i = items.index(item)
    except ValueError:
        return None
    return [items.pop(i)]


def union(items1: Items, items2: Items) -> List[Any]:
    """Concatenate two collections into a new list"""
    return values(items1) + values(items2)


def difference(items1: Items, items2: Items) -> List[Any]:
    """Elements exclusive to only one of the two collections"""
    return union(
        select(items1, lambda value, _: not contains(items2, value)),
        select(items2, lambda value, _: not contains(items1, value))
    )


def intersection(items1: Items, items2: Items) -> Items:
    """Elements of <items1> also contained in <items2>"""
    return select(items1, lambda value, _: contains(items2, value))


def clone(items: Any) -> Any:
    """Shallow copy of a list or dict; anything else is returned as is"""
    if isinstance(items, Mapping):
        return dict(items)
    if isinstance(items, (list, tuple)):
        return list(items)
    return items


def keys(items: Items) -> List[Any]:
    if isinstance(items, Mapping):
        return list(items.keys())
    return list(range(len(items)))


def values(items: Items) -> List[Any]:
    if isinstance(items, Mapping):
        return list(items.values())
    return list(items)


def size(items: Items) -> int:
    return len(items)


def average(numbers: Items) -> float:
    numbers = values(numbers)
    return sum(numbers) / len(numbers)


def unique(items: Items) -> List[Any]:
    """Remove duplicates, keeping first occurrences in order"""
    out: List[Any] = []
    for item in values(items):
        if item not in out:
            out.append(item)
    return out


def merge(obj1: Optional[Mapping], obj2: Optional[Mapping]) -> Dict[Any, Any]:
    """New dict with the fields of both mappings; <obj2> wins on conflicts"""
    out = dict(obj1 or {})
    out.update(obj2 or {})
    return out


def deep_merge(obj1: Optional[Mapping], obj2: Optional[Mapping]) -> Dict[Any, Any]:
    """Like merge, but nested mappings present on both sides are merged too"""
    out = dict(obj1 or {})
    for key, value in (obj2 or {}).items():
        if isinstance(value, Mapping) and isinstance(out.get(key), Mapping):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = value
    return out


def compact(items: Items) -> Items:
    """Copy without the None elements"""
    return select(items, lambda item, _: item is not None)


def _pairs(items: Items):
    if isinstance(items, Mapping):
        return items.items()
    return enumerate(items)
