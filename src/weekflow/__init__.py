"""Weekflow - Monday-anchored week numbers and week ranges."""

from ._version import __version__
from .calculator import (
    WeekCalculator,
    first_monday_of_year,
    get_week_by_date,
    get_week_end,
    get_week_info,
    get_week_range,
    get_week_start,
    normalize_date,
)
from .config import ConfigLoader, WeekflowConfig
from .errors import ConfigurationError, InvalidDateError, WeekflowError
from .week_types import WeekInfo, WeekRange

__all__ = [
    "__version__",
    "get_week_by_date",
    "get_week_range",
    "get_week_info",
    "get_week_start",
    "get_week_end",
    "normalize_date",
    "first_monday_of_year",
    "WeekCalculator",
    "WeekflowConfig",
    "ConfigLoader",
    "WeekRange",
    "WeekInfo",
    "WeekflowError",
    "InvalidDateError",
    "ConfigurationError",
]
