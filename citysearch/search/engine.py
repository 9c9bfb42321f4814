from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Real
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .distance import score_distance
from .errors import InvalidCriteria, InvalidDataset, InvalidQuery
from .models import Criterion, CriterionType, DistanceCriterionConfig, GeoPoint, TextCriterionConfig
from .projector import project
from .registry import CriterionRegistry
from .rounding import round_half_up
from .text import score_text

logger = logging.getLogger(__name__)

DEFAULT_SCORE_MIN = 0.3
DEFAULT_LIMIT = 15


@dataclass(frozen=True)
class PartialResult:
    """One record's outcome for a single criterion pass."""

    record_id: str
    score: float
    weight: float
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Accumulated:
    """Running score and weight of a record across the criteria applied so far."""

    score: float
    weight: float
    attributes: Mapping[str, Any]

    @classmethod
    def seed(cls, partial: PartialResult) -> Accumulated:
        return cls(partial.score, partial.weight, dict(partial.attributes))

    def merge(self, partial: PartialResult) -> Accumulated:
        return Accumulated(
            score=self.score + partial.score,
            weight=self.weight + partial.weight,
            attributes={**self.attributes, **partial.attributes},
        )

    @property
    def normalized_score(self) -> float:
        return round_half_up(self.score / self.weight)


def _fold(
    accumulated: Mapping[str, Accumulated], partials: Sequence[PartialResult]
) -> dict[str, Accumulated]:
    """Merge one criterion's partial results into a new accumulator."""
    merged = dict(accumulated)
    for partial in partials:
        current = merged.get(partial.record_id)
        merged[partial.record_id] = (
            Accumulated.seed(partial) if current is None else current.merge(partial)
        )
    return merged


def _freeze_records(records: Any) -> tuple[Mapping[str, Any], ...]:
    if isinstance(records, Mapping):
        records = [records]
    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        raise InvalidDataset(
            f"records must be a sequence of mappings, got {type(records).__name__}"
        )

    frozen: list[Mapping[str, Any]] = []
    seen: set[str] = set()
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidDataset(f"record at position {position} is not a mapping")
        if record.get("id") is None:
            raise InvalidDataset(f"record at position {position} has no id")
        record_id = str(record["id"])
        if record_id in seen:
            raise InvalidDataset(f"duplicate record id {record_id!r}")
        seen.add(record_id)
        frozen.append(MappingProxyType(dict(record)))
    return tuple(frozen)


def _freeze_allowed(allowed_attributes: Any) -> tuple[str, ...]:
    if allowed_attributes is None:
        return ()
    if isinstance(allowed_attributes, str):
        return (allowed_attributes,)
    allowed = tuple(allowed_attributes)
    if not all(isinstance(name, str) for name in allowed):
        raise InvalidCriteria("allowed attributes must be attribute names")
    return allowed


class RankingEngine:
    """Rank a fixed record set against multi-criteria queries.

    The records, the criteria and the allow list are fixed at construction
    and never mutated afterwards; ``compute_search`` keeps all of its state
    local, so one engine can serve concurrent callers.
    """

    def __init__(
        self,
        records: Sequence[Mapping[str, Any]],
        criteria: Mapping[str, Any],
        allowed_attributes: Sequence[str] | None = None,
    ) -> None:
        self._records = _freeze_records(records)
        self._registry = criteria if isinstance(criteria, CriterionRegistry) else CriterionRegistry(criteria)
        self._allowed = _freeze_allowed(allowed_attributes)

    @property
    def records(self) -> tuple[Mapping[str, Any], ...]:
        return self._records

    @property
    def registry(self) -> CriterionRegistry:
        return self._registry

    @property
    def allowed_attributes(self) -> tuple[str, ...]:
        return self._allowed

    # ------------------------------------------------------------------
    # Query validation
    # ------------------------------------------------------------------

    def _parse_query(self, query: Any) -> list[tuple[Criterion, Any]]:
        """Pair each applicable criterion, in registry order, with its payload."""
        if not isinstance(query, Mapping) or not query:
            raise InvalidQuery("search query must be a non-empty mapping")

        applied: list[tuple[Criterion, Any]] = []
        for criterion in self._registry:
            payload = query.get(criterion.name)
            if not payload:
                continue
            if criterion.type is CriterionType.text:
                if not isinstance(payload, str):
                    raise InvalidQuery(f"{criterion.name!r} expects a text query")
                applied.append((criterion, payload))
            else:
                try:
                    applied.append((criterion, GeoPoint.model_validate(payload)))
                except ValidationError as exc:
                    raise InvalidQuery(
                        f"{criterion.name!r} expects a latitude/longitude pair: {exc}"
                    ) from exc
        return applied

    def validate_query(self, query: Any) -> None:
        """Raise ``InvalidQuery`` if *query* cannot be searched."""
        self._parse_query(query)

    # ------------------------------------------------------------------
    # Criterion passes
    # ------------------------------------------------------------------

    def _pool(self, candidates: Mapping[str, Accumulated]) -> list[Mapping[str, Any]]:
        if not candidates:
            return list(self._records)
        return [r for r in self._records if str(r["id"]) in candidates]

    def _text_pass(
        self, criterion: Criterion, query: str, pool: Sequence[Mapping[str, Any]]
    ) -> list[PartialResult]:
        config: TextCriterionConfig = criterion.config  # type: ignore[assignment]
        partials: list[PartialResult] = []
        for record in pool:
            match = score_text(
                record.get(criterion.name),
                query,
                config.secondary_search_malus,
                criterion.weight,
            )
            if match is None:
                continue
            partials.append(
                PartialResult(
                    record_id=str(record["id"]),
                    score=match.score,
                    weight=criterion.weight,
                    attributes={"secondary_match": match.secondary_match},
                )
            )
        return partials

    def _distance_pass(
        self,
        criterion: Criterion,
        point: GeoPoint,
        pool: Sequence[Mapping[str, Any]],
        keep_zero_scores: bool,
    ) -> list[PartialResult]:
        config: DistanceCriterionConfig = criterion.config  # type: ignore[assignment]
        target = (point.latitude, point.longitude)
        partials: list[PartialResult] = []
        for record in pool:
            latitude = record.get(config.latitude_attr)
            longitude = record.get(config.longitude_attr)
            match = score_distance(
                (latitude, longitude), target, config.limit_km, criterion.weight
            )
            # Zero scores only annotate records that are already candidates.
            if not match.score and not keep_zero_scores:
                continue
            partials.append(
                PartialResult(
                    record_id=str(record["id"]),
                    score=match.score,
                    weight=criterion.weight,
                    attributes={
                        "latitude": latitude,
                        "longitude": longitude,
                        "distance": match.distance_km,
                        "distance_label": match.label,
                    },
                )
            )
        return partials

    def _score_criterion(
        self,
        criterion: Criterion,
        payload: Any,
        candidates: Mapping[str, Accumulated],
    ) -> list[PartialResult]:
        pool = self._pool(candidates)
        if criterion.type is CriterionType.text:
            partials = self._text_pass(criterion, payload, pool)
        else:
            partials = self._distance_pass(criterion, payload, pool, keep_zero_scores=bool(candidates))
        logger.debug(
            "Criterion %s scored %d of %d records", criterion.name, len(partials), len(pool)
        )
        return partials

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def accumulate(self, query: Mapping[str, Any]) -> dict[str, Accumulated]:
        """Fold every applicable criterion into per-record accumulated scores.

        The candidate set is the accumulator's key set: the first criterion
        with any match seeds it, and later criteria only score records that
        are already in it.
        """
        accumulated: dict[str, Accumulated] = {}
        for criterion, payload in self._parse_query(query):
            accumulated = _fold(accumulated, self._score_criterion(criterion, payload, accumulated))
        return accumulated

    def compute_search(
        self,
        query: Mapping[str, Any],
        score_min: float = DEFAULT_SCORE_MIN,
        limit: int = DEFAULT_LIMIT,
    ) -> list[dict[str, Any]]:
        """Return the ranked, filtered and projected results for *query*.

        Primary text matches rank before secondary ones whatever their
        score; within each class results are ordered by score, highest
        first. Only results scoring strictly above *score_min* are kept, at
        most *limit* of them.
        """
        if isinstance(score_min, bool) or not isinstance(score_min, Real):
            raise InvalidQuery(f"score_min must be a number, got {score_min!r}")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise InvalidQuery(f"limit must be a non-negative integer, got {limit!r}")

        accumulated = self.accumulate(query)
        by_id = {str(r["id"]): r for r in self._records if str(r["id"]) in accumulated}

        scored = [
            (record_id, state.normalized_score, state.attributes)
            for record_id, state in accumulated.items()
        ]
        scored.sort(key=lambda item: (bool(item[2].get("secondary_match", False)), -item[1]))

        results: list[dict[str, Any]] = []
        for record_id, score, attributes in scored:
            if len(results) >= limit:
                break
            if score <= score_min:
                continue
            item = {**by_id[record_id], **attributes, "score": score}
            projected = project(item, self._allowed)
            if projected is None:
                continue
            projected["score"] = score
            results.append(projected)

        logger.debug(
            "Search over %s matched %d records, returning %d",
            list(query), len(accumulated), len(results),
        )
        return results
