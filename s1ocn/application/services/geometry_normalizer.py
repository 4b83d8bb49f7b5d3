"""Search polygon normalization."""

from functools import singledispatch

import numpy as np
import pandas as pd
import shapely.wkt
import structlog
from shapely.errors import ShapelyError
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from s1ocn.domain.types import PolygonInput
from s1ocn.infrastructure.observability.metrics import polygon_fallbacks

logger = structlog.get_logger()

DEFAULT_SEARCH_POLYGON = Polygon([(-90, -180), (-90, 180), (90, 180), (90, -180), (-90, -180)])


class PolygonConversionError(ValueError):
    """Input could not be turned into a geometry."""


@singledispatch
def to_geometry(value: object) -> BaseGeometry:
    """Convert a supported area-of-interest representation to a geometry."""
    raise PolygonConversionError(f"Unsupported search polygon type: {type(value).__name__}")


@to_geometry.register
def _(value: BaseGeometry) -> BaseGeometry:
    return value


@to_geometry.register
def _(value: pd.DataFrame) -> BaseGeometry:
    return to_geometry(value.to_numpy())


@to_geometry.register(np.ndarray)
@to_geometry.register(list)
@to_geometry.register(tuple)
def _(value) -> BaseGeometry:
    try:
        coords = np.asarray(value, dtype="float64")
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise PolygonConversionError(f"Expected a two column coordinate matrix, got shape {coords.shape}")
        return Polygon(coords)
    except (TypeError, ValueError, ShapelyError) as e:
        raise PolygonConversionError(f"Coordinate matrix is not a polygon ring: {e}") from e


@to_geometry.register
def _(value: str) -> BaseGeometry:
    try:
        return shapely.wkt.loads(value)
    except ShapelyError as e:
        raise PolygonConversionError(f"Invalid WKT: {e}") from e


def is_search_polygon(geometry: BaseGeometry) -> bool:
    """Valid single polygon."""
    return (
        isinstance(geometry, Polygon)
        and not geometry.is_empty
        and geometry.is_valid
        and geometry.geom_type == "Polygon"
    )


def encode_wkt(geometry: BaseGeometry) -> str:
    """WKT text with spaces encoded for the query string."""
    return geometry.wkt.replace(" ", "%20")


def normalize_polygon(value: PolygonInput) -> str:
    """Normalize an area of interest to an encoded WKT polygon.

    Falls back to a worldwide polygon when the input cannot be converted or
    is not a valid single polygon.
    """
    try:
        geometry = to_geometry(value)
    except PolygonConversionError as e:
        logger.warning(
            "search_polygon_conversion_failed",
            message="Search polygon conversion failed. Performing worldwide search.",
            error=str(e),
        )
        polygon_fallbacks.labels(reason="conversion").inc()
        geometry = DEFAULT_SEARCH_POLYGON

    if not is_search_polygon(geometry):
        logger.warning(
            "search_polygon_invalid",
            message="Search polygon is not a valid polygon. Performing worldwide search.",
            geom_type=geometry.geom_type,
        )
        polygon_fallbacks.labels(reason="invalid").inc()
        geometry = DEFAULT_SEARCH_POLYGON

    return encode_wkt(geometry)
