"""Domain entities."""

from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np

from s1ocn.domain.errors import InvalidSearchCriteriaError
from s1ocn.domain.types import AttributeValue, DateInput, JsonValue, PolygonInput, ProductRecord


@dataclass(frozen=True)
class AttributeDescriptor:
    """Filterable attribute advertised by the catalogue."""

    name: str
    # Advertised type name, e.g. String, Integer, DateTimeOffset
    value_type: str


@dataclass(frozen=True)
class SearchCriteria:
    """Caller supplied product search filters."""

    max_results: int = 20
    search_polygon: PolygonInput | None = None
    datetime_start: DateInput = None
    datetime_end: DateInput = None
    attribute_filters: Mapping[str, AttributeValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_results <= 0:
            raise InvalidSearchCriteriaError(
                f"max_results must be a positive integer, got {self.max_results}",
            )


@dataclass(frozen=True)
class Page:
    """One catalogue response."""

    items: list[ProductRecord]
    next_link: str | None = None


@dataclass(frozen=True)
class AccessToken:
    """Identity provider tokens."""

    access_token: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class WindData:
    """Wind grids and metadata read from an OCN product."""

    vars: dict[str, np.ndarray]
    dims: dict[str, int]
    global_attributes: dict[str, JsonValue]
