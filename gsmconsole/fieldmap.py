"""Turn dataclass instances into dictionaries keyed by field metadata tags."""

from __future__ import annotations

import dataclasses
from typing import Any


def to_map(obj: Any, tag_name: str) -> dict[str, Any]:
    """Map each field tagged with ``tag_name`` in its metadata to its value.

    Fields without the tag are left out. Only dataclass instances are accepted.
    """
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(
            f"to_map only accepts dataclass instances; got {type(obj).__name__}"
        )
    return {
        f.metadata[tag_name]: getattr(obj, f.name)
        for f in dataclasses.fields(obj)
        if f.metadata.get(tag_name)
    }