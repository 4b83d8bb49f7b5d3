"""Sentinel-1 OCN package reader."""

import re
import tempfile
import zipfile
from pathlib import Path

import netCDF4
import numpy as np
import structlog

from s1ocn.domain.entities import WindData
from s1ocn.domain.errors import ArchiveExtractionError
from s1ocn.domain.ports import ArchiveReaderPort
from s1ocn.domain.types import JsonValue

logger = structlog.get_logger()

MEASUREMENT_PATTERN = re.compile(r"measurement/.*?\.nc$")
WIND_PREFIX = "owi"


class OcnArchiveReader(ArchiveReaderPort):
    """Reads the ocean wind (owi) component of an OCN product ZIP."""

    def read(self, filepath: str | Path) -> WindData:
        """Read wind variables, dimensions and global attributes."""
        filepath = Path(filepath)
        logger.info("reading_ocn_archive", path=str(filepath))

        try:
            with zipfile.ZipFile(filepath) as archive:
                member = self._measurement_member(archive)
                with tempfile.TemporaryDirectory() as tmpdir:
                    nc_file = archive.extract(member, path=tmpdir)
                    wind_data = read_wind_netcdf(nc_file)
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveExtractionError(f"Failed to read OCN package {filepath}: {e}") from e

        logger.info(
            "ocn_archive_read",
            path=str(filepath),
            variable_count=len(wind_data.vars),
            dimension_count=len(wind_data.dims),
        )
        return wind_data

    def _measurement_member(self, archive: zipfile.ZipFile) -> str:
        """First NetCDF file in the measurement folder."""
        for name in archive.namelist():
            if MEASUREMENT_PATTERN.search(name):
                return name
        raise ArchiveExtractionError(
            f"No measurement NetCDF file found in {archive.filename}"
        )


def read_wind_netcdf(nc_file: str | Path) -> WindData:
    """Read the owi variables of a NetCDF file into memory."""
    with netCDF4.Dataset(str(nc_file)) as ds:
        variables = {
            name: _to_array(variable[:])
            for name, variable in ds.variables.items()
            if name.startswith(WIND_PREFIX)
        }
        dims = {
            name: len(dim)
            for name, dim in ds.dimensions.items()
            if name.startswith(WIND_PREFIX)
        }
        global_attributes: dict[str, JsonValue] = {
            name: _to_attribute(ds.getncattr(name)) for name in ds.ncattrs()
        }
    return WindData(vars=variables, dims=dims, global_attributes=global_attributes)


def _to_array(values) -> np.ndarray:
    """Plain array with fill values as NaN where the dtype allows it."""
    if np.ma.isMaskedArray(values):
        if not np.ma.is_masked(values):
            return np.asarray(values.data)
        if np.issubdtype(values.dtype, np.floating):
            return values.filled(np.nan)
        if np.issubdtype(values.dtype, np.integer):
            return values.astype("float64").filled(np.nan)
        return np.asarray(values.data)
    return np.asarray(values)


def _to_attribute(value) -> JsonValue:
    """Global attribute as a plain Python value."""
    if isinstance(value, np.ndarray):
        return value.item() if value.size == 1 else value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value
