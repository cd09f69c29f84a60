"""Severity table: the eight PSR-3 levels, their ranks, and filtering."""

import logging
from enum import Enum

from levelog.core.exceptions import InvalidSeverity


class Severity(str, Enum):
    """Named log severity.

    Members are declared from most to least severe; ``rank`` is the
    declaration index, so EMERGENCY is 0 and DEBUG is 7.
    """

    EMERGENCY = "emergency"
    ALERT = "alert"
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"
    INFO = "info"
    DEBUG = "debug"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Numeric rank, lower is more severe."""
        return _RANKS[self]

    @property
    def stdlib_level(self) -> int:
        """Equivalent level number in the standard library logging module."""
        return _STDLIB_LEVELS[self]

    @classmethod
    def from_stdlib(cls, levelno: int) -> "Severity":
        """Map a stdlib logging level number to the closest severity.

        Args:
            levelno: A ``logging`` level number (e.g. ``logging.WARNING``).

        Returns:
            The most severe Severity whose stdlib level does not exceed
            levelno. Levels below DEBUG map to DEBUG.
        """
        for severity in cls:
            if levelno >= severity.stdlib_level:
                return severity
        return cls.DEBUG


_RANKS: dict[Severity, int] = {severity: i for i, severity in enumerate(Severity)}

# NOTICE has no stdlib counterpart; it sits between INFO and WARNING.
_STDLIB_LEVELS: dict[Severity, int] = {
    Severity.EMERGENCY: logging.CRITICAL + 20,
    Severity.ALERT: logging.CRITICAL + 10,
    Severity.CRITICAL: logging.CRITICAL,
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.NOTICE: logging.INFO + 5,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
}


def parse_severity(value: "Severity | str") -> Severity:
    """Resolve a Severity from an enum member or a case-insensitive name.

    Args:
        value: A Severity member or one of the eight level names.

    Returns:
        The matching Severity.

    Raises:
        InvalidSeverity: If the value names no known severity.
    """
    # @tra: Core.Severity.Parse
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        try:
            return Severity(value.strip().lower())
        except ValueError:
            pass
    raise InvalidSeverity(value)


def should_log(severity: "Severity | str", min_severity: "Severity | str") -> bool:
    """Return True if severity is at least as severe as min_severity.

    Raises:
        InvalidSeverity: If either argument names no known severity.
    """
    # @tra: Core.Severity.Filter
    return parse_severity(severity).rank <= parse_severity(min_severity).rank
