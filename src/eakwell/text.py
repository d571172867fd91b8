"""
Small string and value helpers
"""

import re
import uuid as _uuid
from typing import Any, List, Pattern, Union


def noop(*args: Any, **kwargs: Any) -> None:
    """Empty placeholder function"""


def capitalize(s: str) -> str:
    """Uppercase the first character, leaving the rest untouched"""
    return s[:1].upper() + s[1:]


def scan(s: str, pattern: Union[str, Pattern[str]]) -> List["re.Match[str]"]:
    """Return all matches of <pattern> in <s>"""
    return list(re.finditer(pattern, s))


def square(n: float) -> float:
    return n * n


def uuid() -> str:
    """Return a random (version 4) UUID string"""
    return str(_uuid.uuid4())


def has_value(obj: Any) -> bool:
    return obj is not None
