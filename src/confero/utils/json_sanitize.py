from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date
from pathlib import Path
from typing import Any, Mapping


def json_sanitize(x: Any) -> Any:
    """
    Turn route data into JSON-safe values.
    - dataclasses (Post, Space, Breadcrumb, ...) -> dict of their fields
    - date/datetime -> ISO string
    - Path -> str
    - set/frozenset -> sorted list
    - tuple/list -> list, mappings -> dict with str keys
    """
    if x is None or isinstance(x, (str, int, float, bool)):
        return x

    if isinstance(x, date):
        return x.isoformat()

    if isinstance(x, Path):
        return str(x)

    if is_dataclass(x) and not isinstance(x, type):
        # slots dataclasses have no __dict__; walk declared fields
        return {f.name: json_sanitize(getattr(x, f.name)) for f in fields(x)}

    if isinstance(x, (set, frozenset)):
        return [json_sanitize(v) for v in sorted(x, key=lambda v: str(v))]

    if isinstance(x, (tuple, list)):
        return [json_sanitize(v) for v in x]

    if isinstance(x, Mapping):
        return {str(k): json_sanitize(v) for k, v in x.items()}

    raise TypeError(f"cannot serialize {type(x).__name__} to JSON")
