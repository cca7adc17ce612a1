"""
Calendar module: date-part extraction and season binning.
"""

import logging
import numbers

import pandas as pd

from . import config
from .errors import DateParseError, DomainError, SchemaError

logger = logging.getLogger(__name__)

_MONTH_TO_SEASON = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "fall", 10: "fall", 11: "fall",
}


def derive_calendar_fields(table, date_column="date"):
    """
    Parse `date_column` and add year, month, day and julian (day of year).

    Applying it to an already-derived table gives the same columns back.

    Args:
        table: DataFrame with a date column (strings or datetimes)
        date_column: name of the date column

    Returns:
        Copy of `table` with `date_column` as datetime64 and int64
        `year`, `month`, `day`, `julian` columns

    Raises:
        SchemaError: `date_column` is absent
        DateParseError: a value is null or not a calendar date
    """
    if date_column not in table.columns:
        raise SchemaError(f"'{date_column}' column not found", missing=[date_column])

    df_clean = table.copy()
    raw = df_clean[date_column]
    parsed = pd.to_datetime(raw, errors="coerce", format="mixed")

    bad = parsed.isna()
    if bad.any():
        bad_values = raw[bad].tolist()
        raise DateParseError(
            f"{int(bad.sum())} unparseable values in '{date_column}': {bad_values[:10]}",
            values=bad_values,
        )

    df_clean[date_column] = parsed
    df_clean["year"] = parsed.dt.year.astype("int64")
    df_clean["month"] = parsed.dt.month.astype("int64")
    df_clean["day"] = parsed.dt.day.astype("int64")
    df_clean["julian"] = parsed.dt.dayofyear.astype("int64")

    logger.debug("Date column '%s': %s to %s", date_column, parsed.min(), parsed.max())
    return df_clean


def derive_season(month):
    """
    Map a month (1-12) to winter, spring, summer or fall.

    Dec-Feb is winter, Mar-May spring, Jun-Aug summer, Sep-Nov fall.

    Raises:
        DomainError: `month` is not an integer in 1-12
    """
    if isinstance(month, bool) or not isinstance(month, numbers.Real):
        raise DomainError(f"Month must be an integer in 1-12, got {month!r}")
    try:
        as_int = int(month)
    except (ValueError, OverflowError):
        raise DomainError(f"Month must be an integer in 1-12, got {month!r}") from None
    if as_int != month or as_int not in _MONTH_TO_SEASON:
        raise DomainError(f"Month must be an integer in 1-12, got {month!r}")
    return _MONTH_TO_SEASON[as_int]


def season_dtype():
    """Ordered categorical dtype: winter < spring < summer < fall."""
    return pd.CategoricalDtype(categories=list(config.SEASONS), ordered=True)


def add_season(table, month_column="month"):
    """Add an ordered categorical `season` column derived from `month_column`."""
    if month_column not in table.columns:
        raise SchemaError(f"'{month_column}' column not found", missing=[month_column])

    df_clean = table.copy()
    seasons = [derive_season(m) for m in df_clean[month_column].tolist()]
    df_clean["season"] = pd.Series(seasons, index=df_clean.index, dtype=season_dtype())
    return df_clean
