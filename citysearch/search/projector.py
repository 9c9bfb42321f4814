from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def project(record: Mapping[str, Any], allowed: Sequence[str]) -> dict[str, Any] | None:
    """Restrict *record* to the attributes named in *allowed*.

    An empty allow list keeps the record as is. A record sharing no attribute
    with the allow list is not worth returning: ``None``.
    """
    if not allowed:
        return dict(record)

    projected = {name: record[name] for name in allowed if name in record}
    return projected or None
