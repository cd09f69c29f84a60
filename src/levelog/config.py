"""Logger configuration."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from levelog.core.severity import Severity, parse_severity

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LoggerConfig:
    """Initial settings for a Logger.

    Attributes:
        min_severity: Least severe level that is still written (inclusive).
        deduplication: Collapse immediately repeated records.
    """

    min_severity: Severity = Severity.DEBUG
    deduplication: bool = True

    def __post_init__(self) -> None:
        # Accept level names; fail now rather than at the first log call.
        object.__setattr__(self, "min_severity", parse_severity(self.min_severity))

    @classmethod
    def from_env(
        cls,
        prefix: str = "LEVELOG_",
        environ: Mapping[str, str] | None = None,
    ) -> "LoggerConfig":
        """Build a config from environment variables.

        Reads ``{prefix}LEVEL`` (severity name) and ``{prefix}DEDUPLICATION``
        (``1``/``true``/``yes``/``on`` enable it). Unset variables keep the
        defaults.

        Args:
            prefix: Variable name prefix.
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            InvalidSeverity: If the level variable names no known severity.
        """
        env = os.environ if environ is None else environ
        level = env.get(f"{prefix}LEVEL")
        dedup = env.get(f"{prefix}DEDUPLICATION")
        return cls(
            min_severity=parse_severity(level) if level else Severity.DEBUG,
            deduplication=(
                True if dedup is None else dedup.strip().lower() in _TRUE_VALUES
            ),
        )
