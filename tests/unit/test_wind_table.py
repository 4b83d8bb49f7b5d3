"""Unit tests for wind tables."""

import numpy as np
import pandas as pd
import pytest

from s1ocn.application.services.wind_table import build_wind_table, wind_data_list_to_tables
from s1ocn.domain.entities import WindData


def make_wind_data(first="2021-01-01T06:00:00.000000", last="2021-01-01T06:00:25.000000"):
    """Create a 2x3 wind grid."""
    shape = (2, 3)
    global_attributes = {"missionName": "S1A"}
    if first is not None:
        global_attributes["firstMeasurementTime"] = first
    if last is not None:
        global_attributes["lastMeasurementTime"] = last
    return WindData(
        vars={
            "owiLon": np.arange(6, dtype="float64").reshape(shape),
            "owiLat": np.arange(6, 12, dtype="float64").reshape(shape),
            "owiWindSpeed": np.array([[5.0, np.nan, 7.0], [8.0, 9.0, 10.0]]),
            "owiWindDirection": np.full(shape, 180.0),
            "owiMask": np.zeros(shape),
            "owiPolarisationName": np.array(["VV", "VH"]),
        },
        dims={"owiAzSize": 2, "owiRaSize": 3, "owiPolarisation": 2},
        global_attributes=global_attributes,
    )


def test_build_wind_table_columns():
    """Test one row per grid cell with time columns first."""
    table = build_wind_table(make_wind_data())

    assert list(table.columns) == [
        "firstMeasurementTime",
        "lastMeasurementTime",
        "owiLon",
        "owiLat",
        "owiWindSpeed",
        "owiWindDirection",
        "owiMask",
    ]
    assert len(table) == 6
    assert list(table["owiLon"]) == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
    assert np.isnan(table["owiWindSpeed"].iloc[1])


def test_build_wind_table_times():
    """Test measurement times are parsed as UTC timestamps."""
    table = build_wind_table(make_wind_data())

    assert table["firstMeasurementTime"].iloc[0] == pd.Timestamp("2021-01-01T06:00:00", tz="UTC")
    assert table["lastMeasurementTime"].iloc[5] == pd.Timestamp("2021-01-01T06:00:25", tz="UTC")


def test_build_wind_table_missing_time():
    """Test absent or unparsable times become NaT."""
    table = build_wind_table(make_wind_data(first=None, last="not a time"))

    assert table["firstMeasurementTime"].isna().all()
    assert table["lastMeasurementTime"].isna().all()


def test_build_wind_table_attrs():
    """Test non tabled data is kept in attrs."""
    table = build_wind_table(make_wind_data())

    assert list(table.attrs["vars"]) == ["owiPolarisationName"]
    assert table.attrs["dims"] == {"owiAzSize": 2, "owiRaSize": 3, "owiPolarisation": 2}
    assert table.attrs["global_attributes"]["missionName"] == "S1A"


def test_build_wind_table_size_mismatch():
    """Test grids of different sizes are rejected."""
    wind_data = make_wind_data()
    wind_data.vars["owiLat"] = np.zeros(4)

    with pytest.raises(ValueError, match="differ in size"):
        build_wind_table(wind_data)


def test_wind_data_list_to_tables():
    """Test product keys are kept."""
    tables = wind_data_list_to_tables({"a.SAFE": make_wind_data(), "b.SAFE": make_wind_data()})

    assert list(tables) == ["a.SAFE", "b.SAFE"]
    assert all(len(table) == 6 for table in tables.values())
