"""
Table schemas: required/optional columns and raw-name aliases per table kind.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .errors import SchemaError


@dataclass(frozen=True)
class TableSchema:
    name: str
    required: Tuple[str, ...]
    optional: Tuple[str, ...] = ()
    rename: Dict[str, str] = field(default_factory=dict)

    def missing(self, columns) -> list:
        """Return required columns absent from `columns`, in schema order."""
        present = set(columns)
        return [col for col in self.required if col not in present]

    def validate(self, table):
        """Raise SchemaError if any required column is absent."""
        missing = self.missing(table.columns)
        if missing:
            raise SchemaError(
                f"Missing columns in {self.name} table: {missing} "
                f"(found: {list(table.columns)})",
                missing=missing,
            )
        return table


WEATHER_SCHEMA = TableSchema(
    name="weather",
    required=("date", "mean_airtemp", "daily_precip", "mean_windspeed"),
    rename={
        "datetime": "date",
        "airt": "mean_airtemp",
        "mean_air_temp": "mean_airtemp",
        "air_temp": "mean_airtemp",
        "prec": "daily_precip",
        "precip": "daily_precip",
        "precipitation": "daily_precip",
        "wspd": "mean_windspeed",
        "mean_wind_speed": "mean_windspeed",
        "wind_speed": "mean_windspeed",
    },
)

SITE_SCHEMA = TableSchema(
    name="sites",
    required=("name", "type"),
    optional=("comment",),
    rename={
        "site_name": "name",
        "site_type": "type",
        "notes": "comment",
    },
)

BOUNDARY_SCHEMA = TableSchema(
    name="study_area",
    required=("name",),
    rename={"area_name": "name", "label": "name"},
)

POI_SCHEMA = TableSchema(
    name="poi",
    required=("name", "type", "x", "y"),
    rename={
        "easting": "x",
        "northing": "y",
        "poi_name": "name",
        "category": "type",
    },
)
