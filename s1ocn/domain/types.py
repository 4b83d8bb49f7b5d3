"""Domain types and aliases."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Union

import numpy as np
import pandas as pd
from shapely.geometry.base import BaseGeometry

Timestamp = datetime

# JSON-serializable types (recursive)
if TYPE_CHECKING:
    JsonValue = str | int | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
else:
    JsonValue = str | int | float | bool | None | dict | list

# One product as returned by the catalogue, opaque to the search engine
ProductRecord = dict[str, JsonValue]

# All products of a search, one row per record
ResultCollection = pd.DataFrame

AttributeValue = Union[str, int, float, bool]

DateInput = Union[str, date, datetime, None]

CoordinateMatrix = Union[np.ndarray, list, tuple]

PolygonInput = Union[BaseGeometry, pd.DataFrame, CoordinateMatrix, str]
