from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from .errors import InvalidCriteria
from .models import Criterion


class CriterionRegistry:
    """Ordered, read-only set of the criteria an engine can score.

    Built from a mapping of criterion name to its definition, e.g.::

        {
            "name": {"type": "text", "weight": 0.6,
                     "config": {"secondary_search_malus": 0.1}},
            "distance": {"type": "distance", "weight": 0.8,
                         "config": {"latitude_attr": "lat",
                                    "longitude_attr": "long",
                                    "limit_km": 1000}},
        }

    Definition order is the order criteria are applied in.
    """

    def __init__(self, criteria: Mapping[str, Any]) -> None:
        if not isinstance(criteria, Mapping):
            raise InvalidCriteria(
                f"criteria must be a mapping of name -> definition, got {type(criteria).__name__}"
            )
        if not criteria:
            raise InvalidCriteria("at least one criterion must be configured")

        parsed: list[Criterion] = []
        for name, definition in criteria.items():
            parsed.append(self._parse(name, definition))
        self._criteria: tuple[Criterion, ...] = tuple(parsed)
        self._by_name = {c.name: c for c in self._criteria}

    @staticmethod
    def _parse(name: Any, definition: Any) -> Criterion:
        if isinstance(definition, Criterion):
            if definition.name != name:
                raise InvalidCriteria(
                    f"criterion registered as {name!r} is named {definition.name!r}"
                )
            return definition
        if not isinstance(name, str):
            raise InvalidCriteria(f"criterion names must be strings, got {name!r}")
        if not isinstance(definition, Mapping):
            raise InvalidCriteria(f"criterion {name!r} must be a mapping")
        try:
            return Criterion.model_validate({**definition, "name": name})
        except ValidationError as exc:
            raise InvalidCriteria(f"criterion {name!r} is malformed: {exc}") from exc

    def __iter__(self) -> Iterator[Criterion]:
        return iter(self._criteria)

    def __len__(self) -> int:
        return len(self._criteria)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Criterion | None:
        return self._by_name.get(name)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self._criteria]
