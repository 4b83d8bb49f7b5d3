"""Tabular view of extracted wind data."""

from concurrent.futures import ProcessPoolExecutor

import numpy as np
import pandas as pd

from s1ocn.domain.entities import WindData

TABLE_VARIABLES = (
    "owiLon",
    "owiLat",
    "owiWindSpeed",
    "owiWindDirection",
    "owiMask",
    "owiInversionQuality",
    "owiHeading",
    "owiWindQuality",
    "owiRadVel",
)

TIME_ATTRIBUTES = ("firstMeasurementTime", "lastMeasurementTime")


def build_wind_table(wind_data: WindData) -> pd.DataFrame:
    """One row per grid cell with the measurement window in front.

    Variables that are not tabled, the dimensions and the global attributes
    are kept in `DataFrame.attrs`.
    """
    columns = {
        name: np.asarray(wind_data.vars[name]).ravel()
        for name in TABLE_VARIABLES
        if name in wind_data.vars
    }
    sizes = {name: len(values) for name, values in columns.items()}
    if len(set(sizes.values())) > 1:
        raise ValueError(f"Wind grids differ in size: {sizes}")

    table = pd.DataFrame(columns)
    for position, attribute in enumerate(TIME_ATTRIBUTES):
        table.insert(position, attribute, _measurement_time(wind_data, attribute))

    table.attrs["vars"] = {
        name: values for name, values in wind_data.vars.items() if name not in TABLE_VARIABLES
    }
    table.attrs["dims"] = dict(wind_data.dims)
    table.attrs["global_attributes"] = dict(wind_data.global_attributes)
    return table


def wind_data_list_to_tables(
    wind_data_list: dict[str, WindData],
    workers: int = 1,
) -> dict[str, pd.DataFrame]:
    """Build a wind table per product, keeping the product keys."""
    names = list(wind_data_list)
    if workers > 1:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            tables = list(executor.map(build_wind_table, wind_data_list.values()))
    else:
        tables = [build_wind_table(wind_data) for wind_data in wind_data_list.values()]
    return dict(zip(names, tables))


def _measurement_time(wind_data: WindData, attribute: str) -> pd.Timestamp:
    value = wind_data.global_attributes.get(attribute)
    if value is None:
        return pd.NaT
    return pd.to_datetime(value, utc=True, errors="coerce")
