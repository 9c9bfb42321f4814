from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)


class CriterionType(str, Enum):
    text = "text"
    distance = "distance"


class TextCriterionConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    secondary_search_malus: float = Field(
        default=0.0,
        validation_alias=AliasChoices("secondary_search_malus", "secondarySearchMalus"),
        description="Subtracted from the score of matches found past the start of the value",
    )


class DistanceCriterionConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude_attr: str = Field(
        default="latitude",
        min_length=1,
        validation_alias=AliasChoices("latitude_attr", "latitudeAttr", "latitudeName"),
    )
    longitude_attr: str = Field(
        default="longitude",
        min_length=1,
        validation_alias=AliasChoices("longitude_attr", "longitudeAttr", "longitudeName"),
    )
    limit_km: float = Field(
        default=10.0,
        gt=0,
        validation_alias=AliasChoices("limit_km", "limitKm", "limit"),
    )


_CONFIG_MODELS: dict[str, type[BaseModel]] = {
    CriterionType.text.value: TextCriterionConfig,
    CriterionType.distance.value: DistanceCriterionConfig,
}


class Criterion(BaseModel):
    """A named, weighted scoring rule configured once at engine setup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    type: CriterionType
    weight: float = Field(..., gt=0)
    config: TextCriterionConfig | DistanceCriterionConfig

    @model_validator(mode="before")
    @classmethod
    def _config_for_type(cls, data: Any) -> Any:
        # The config shape is decided by ``type``, not by trying both models.
        if not isinstance(data, dict):
            return data
        raw_config = data.get("config") or {}
        criterion_type = data.get("type")
        if isinstance(criterion_type, CriterionType):
            criterion_type = criterion_type.value
        config_cls = _CONFIG_MODELS.get(criterion_type)
        if config_cls is None or isinstance(raw_config, config_cls):
            return data
        if isinstance(raw_config, BaseModel):
            raise ValueError(f"{type(raw_config).__name__} does not configure a {criterion_type} criterion")
        try:
            config = config_cls.model_validate(raw_config)
        except ValidationError as exc:
            raise ValueError(f"invalid {criterion_type} config: {exc}") from exc
        return {**data, "config": config}


class GeoPoint(BaseModel):
    """Query payload of a distance criterion."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ..., ge=-90.0, le=90.0, validation_alias=AliasChoices("latitude", "lat")
    )
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        validation_alias=AliasChoices("longitude", "long", "lon", "lng"),
    )


class SearchRequest(BaseModel):
    query: dict[str, Any] = Field(..., description="Criterion name -> criterion payload")
    score_min: float = Field(default=0.3, ge=0.0, le=1.0)
    limit: int = Field(default=15, ge=1, le=100)


class SearchResponse(BaseModel):
    results: list[dict[str, Any]]
    total: int
    response_time_ms: float
    cache_hit: bool = False
