"""BDD step definitions for deduplication features.

Scenarios drive a Logger writing to an InMemorySink and compare the
messages of the written lines.
"""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from levelog.adapters.sinks.in_memory import InMemorySink
from levelog.core.logger import Logger
from levelog.registry import reset_shared, set_shared


@dataclass
class DedupScenarioContext:
    """State shared between the steps of one scenario."""

    sink: InMemorySink = field(default_factory=InMemorySink)
    logger: Logger | None = None

    def messages(self) -> list[str]:
        return [line.split("]: ", 1)[1] for line in self.sink.lines]


@pytest.fixture
def ctx() -> DedupScenarioContext:
    """Fresh scenario context for each test."""
    return DedupScenarioContext()


def _logger(ctx: DedupScenarioContext) -> Logger:
    assert ctx.logger is not None, "scenario must configure a logger first"
    return ctx.logger


# === Given ===
@given(parsers.parse('a logger writing to memory at minimum severity "{severity}"'))
def given_logger(ctx: DedupScenarioContext, severity: str) -> None:
    ctx.logger = Logger(ctx.sink, min_severity=severity)


@given("the logger is the shared logger")
def given_shared_logger(ctx: DedupScenarioContext) -> None:
    set_shared(_logger(ctx))


# === When ===
@when(parsers.parse('"{message}" is logged at "{severity}" {count:d} times'))
def when_logged_n_times(
    ctx: DedupScenarioContext, message: str, severity: str, count: int
) -> None:
    logger = _logger(ctx)
    for _ in range(count):
        logger.log(severity, message)


@when("the duplicates are flushed")
def when_flushed(ctx: DedupScenarioContext) -> None:
    _logger(ctx).flush_duplicates()


@when("deduplication is disabled")
def when_dedup_disabled(ctx: DedupScenarioContext) -> None:
    _logger(ctx).set_deduplication(False)


@when("the shared logger is reset")
def when_shared_reset(ctx: DedupScenarioContext) -> None:
    reset_shared()


# === Then ===
@then("no lines have been written")
def then_no_lines(ctx: DedupScenarioContext) -> None:
    assert ctx.sink.lines == []


@then(parsers.parse("{count:d} lines have been written"))
def then_n_lines(ctx: DedupScenarioContext, count: int) -> None:
    assert len(ctx.sink.lines) == count


@then("the written messages are:")
def then_messages_are(ctx: DedupScenarioContext, datatable: list[list[str]]) -> None:
    header, *rows = datatable
    column = header.index("message")
    assert ctx.messages() == [row[column].strip() for row in rows]
