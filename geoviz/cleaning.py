"""
Cleaning module: column normalization, missing-value sentinels, and popup text.
"""

import datetime
import html
import logging
import re

import geopandas as gpd
import pandas as pd

from . import config
from .errors import SchemaError

logger = logging.getLogger(__name__)


def normalize_column_name(col):
    """'Mean Air-Temp ' -> 'mean_air_temp'."""
    name = str(col).strip().lower()
    return re.sub(r"[\s.\-]+", "_", name)


def normalize_schema(table, schema=None):
    """
    Normalize column names and check the columns later steps rely on.

    Column names are lowercased, stripped, and spaces/dots/dashes become
    underscores. The schema's rename map then maps raw aliases to canonical
    names. The active geometry column of a GeoDataFrame is left alone.

    Args:
        table: DataFrame or GeoDataFrame
        schema: optional TableSchema; its required columns must be present
            after normalization

    Returns:
        Normalized copy of `table`

    Raises:
        SchemaError: two columns normalize to the same name, or a required
            column is missing
    """
    df_clean = table.copy()
    rename = schema.rename if schema is not None else {}

    geometry_col = None
    if isinstance(df_clean, gpd.GeoDataFrame):
        geometry_col = df_clean.geometry.name

    mapping = {}
    seen = {}
    for col in df_clean.columns:
        if col == geometry_col:
            seen[col] = col
            continue
        new = normalize_column_name(col)
        new = rename.get(new, new)
        if new in seen:
            raise SchemaError(
                f"Columns {seen[new]!r} and {col!r} both normalize to {new!r}"
            )
        seen[new] = col
        mapping[col] = new

    df_clean = df_clean.rename(columns=mapping)

    renamed = {old: new for old, new in mapping.items() if old != new}
    if renamed:
        logger.debug("Renamed columns: %s", renamed)

    if schema is not None:
        schema.validate(df_clean)

    return df_clean


def sanitize_missing(table, column, sentinel=config.MISSING_SENTINEL,
                     replacement=config.MISSING_REPLACEMENT):
    """
    Replace every exact occurrence of `sentinel` in `column` with `replacement`.

    Only exact matches are replaced; real nulls and other values pass through.

    Raises:
        SchemaError: `column` is absent
    """
    if column not in table.columns:
        raise SchemaError(f"'{column}' column not found", missing=[column])

    df_clean = table.copy()
    is_sentinel = df_clean[column] == sentinel
    n_replaced = int(is_sentinel.sum())
    if n_replaced:
        df_clean[column] = df_clean[column].where(~is_sentinel, replacement)
        logger.debug("Replaced %d %r values in '%s' with %r", n_replaced, sentinel, column, replacement)

    return df_clean


def _stringify(value, placeholder):
    if value is None:
        return placeholder
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return placeholder
    if isinstance(value, datetime.date):
        return value.strftime("%Y-%m-%d")
    return html.escape(str(value))


def build_marker_text(table, template, separator=config.MARKER_TEXT_SEPARATOR,
                      placeholder=config.MARKER_TEXT_PLACEHOLDER,
                      column=config.MARKER_TEXT_COLUMN):
    """
    Build one popup/tooltip string per row from an ordered template.

    Each template entry is a (label, field) pair; `field` is a column name or
    a callable taking the row as a dict. Every entry contributes
    `label + ": " + value + separator`, in template order. Null values
    render as `placeholder`; other values are HTML-escaped.

    Args:
        table: DataFrame or GeoDataFrame
        template: ordered sequence of (label, field) pairs
        separator: markup appended after each entry
        placeholder: text rendered for null values
        column: name of the output column

    Returns:
        Copy of `table` with `column` added (replaced if already present)

    Raises:
        SchemaError: a template field names a column that does not exist
    """
    missing = [f for _, f in template if not callable(f) and f not in table.columns]
    if missing:
        raise SchemaError(f"Marker text fields not found: {missing}", missing=missing)

    accessors = []
    for label, field in template:
        if callable(field):
            accessors.append((label, field))
        else:
            accessors.append((label, lambda row, name=field: row[name]))

    texts = []
    for row in table.to_dict("records"):
        parts = [f"{label}: {_stringify(get(row), placeholder)}{separator}" for label, get in accessors]
        texts.append("".join(parts))

    df_out = table.copy()
    df_out[column] = pd.Series(texts, index=table.index, dtype="object")
    return df_out
