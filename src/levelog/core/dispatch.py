"""Dispatch of the ``log_<severity>[_<variant>]`` convenience calls.

Every convenience call is one (Severity, Variant) pair routed through a
single entry point, ``dispatch()``. For ergonomics, a named wrapper for each
of the 8 x 6 combinations is generated on LogDispatcher when this module is
imported, so ``dispatcher.log_warning_if(cond, "msg")`` is an ordinary
attribute lookup rather than string parsing at call time.

All wrappers work on the class as well as on an instance:

    ```python
    from levelog import LogDispatcher

    LogDispatcher.log_info("uses the shared logger")

    class OrderService:
        def __init__(self, logger):
            self.log = LogDispatcher(logger)

        def place(self, order_id):
            self.log.log_info("Placing order", {"order_id": order_id})
            return self.log.log_debug_with_timer(lambda: submit(order_id), "Submit")
    ```

Names that do not exist as generated wrappers are parsed on attribute
access, which also accepts the camelCase spelling (``logErrorIf``). Names
starting with ``log`` that match no combination raise UnknownLogMethod.
"""

import logging
import re
import time
import types
from collections.abc import Callable, Mapping
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, NoReturn

import psutil

from levelog.core.caller import CallerResolver
from levelog.core.exceptions import LevelogError, UnknownLogMethod
from levelog.core.formatting import exception_context, interpolate_message
from levelog.core.ports import LoggerPort
from levelog.core.severity import Severity, parse_severity
from levelog.registry import LoggerRegistry, default_registry

FALLBACK_LOGGER_NAME = "levelog.fallback"


class Variant(str, Enum):
    """Control-flow contract of a convenience call."""

    STANDARD = "standard"
    IF = "if"
    UNLESS = "unless"
    AND_RETURN = "and_return"
    WITH_TIMER = "with_timer"
    AND_THROW = "and_throw"


# Longest suffixes first so "_and_return" is not mistaken for something shorter.
_SUFFIXES: tuple[tuple[str, Variant], ...] = (
    ("_and_return", Variant.AND_RETURN),
    ("_with_timer", Variant.WITH_TIMER),
    ("_and_throw", Variant.AND_THROW),
    ("_unless", Variant.UNLESS),
    ("_if", Variant.IF),
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def method_name(severity: Severity, variant: Variant) -> str:
    """Return the generated wrapper name for a (severity, variant) pair."""
    if variant is Variant.STANDARD:
        return f"log_{severity.value}"
    return f"log_{severity.value}_{variant.value}"


def parse_method_name(name: str) -> tuple[Severity, Variant]:
    """Parse a convenience method name into its severity and variant.

    Accepts ``log_warning_and_return`` as well as ``logWarningAndReturn``.

    Raises:
        UnknownLogMethod: If the name matches no (severity, variant) pair.
    """
    # @tra: Core.Dispatch.ParseName
    snake = name if "_" in name else _CAMEL_BOUNDARY.sub("_", name).lower()
    if not snake.startswith("log_"):
        raise UnknownLogMethod(name)
    rest = snake[len("log_"):]
    variant = Variant.STANDARD
    for suffix, candidate in _SUFFIXES:
        if rest.endswith(suffix):
            rest = rest[: -len(suffix)]
            variant = candidate
            break
    try:
        return Severity(rest), variant
    except ValueError:
        raise UnknownLogMethod(name) from None


class _hybridmethod:
    """Method descriptor binding to the instance, or to the class when
    accessed on the class itself."""

    def __init__(self, func: Callable[..., Any]) -> None:
        self.__func__ = func
        self.__name__ = func.__name__
        self.__doc__ = func.__doc__

    def __get__(self, instance: object, owner: type) -> Callable[..., Any]:
        return types.MethodType(self.__func__, owner if instance is None else instance)


class _DispatcherMeta(type):
    def __getattr__(cls, name: str) -> Callable[..., Any]:
        if name.startswith("log"):
            return _dispatch_by_name(cls, name)
        raise AttributeError(name)


def _dispatch_by_name(target: Any, name: str) -> Callable[..., Any]:
    severity, variant = parse_method_name(name)
    return getattr(target, method_name(severity, variant))


def _resolve_logger(target: Any) -> LoggerPort | None:
    # On the class, _logger is the None class default.
    logger = target._logger
    if logger is None:
        logger = target._class_logger
    if logger is None:
        logger = target._registry.get_shared()
    return logger


def _fallback(severity: Severity, message: str) -> None:
    """Emit through the stdlib logging module when no logger is configured."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    logging.getLogger(FALLBACK_LOGGER_NAME).log(
        severity.stdlib_level,
        "[%s] [%s] %s",
        timestamp,
        severity.value.capitalize(),
        message,
    )


def _log_internal(
    target: Any,
    severity: Severity,
    message: object,
    context: Mapping[str, Any] | None = None,
) -> None:
    logger = _resolve_logger(target)
    if logger is None:
        # @tra: Core.Dispatch.Fallback
        _fallback(severity, str(message))
        return
    logger.log(severity, message, dict(context) if context else {})


def _variant_standard(
    target: Any,
    severity: Severity,
    message: object,
    context: Mapping[str, Any] | None = None,
) -> None:
    _log_internal(target, severity, message, context)


def _variant_if(
    target: Any,
    severity: Severity,
    condition: object,
    message: object,
    context: Mapping[str, Any] | None = None,
) -> None:
    if condition:
        _log_internal(target, severity, message, context)


def _variant_unless(
    target: Any,
    severity: Severity,
    condition: object,
    message: object,
    context: Mapping[str, Any] | None = None,
) -> None:
    if not condition:
        _log_internal(target, severity, message, context)


def _variant_and_return(
    target: Any,
    severity: Severity,
    value: Any,
    message: object,
    context: Mapping[str, Any] | None = None,
) -> Any:
    _log_internal(target, severity, message, context)
    return value


def _variant_with_timer(
    target: Any,
    severity: Severity,
    operation: Callable[[], Any],
    description: str = "",
) -> Any:
    if not callable(operation):
        raise TypeError("operation must be callable")
    start = time.perf_counter()
    try:
        result = operation()
    except Exception as exc:
        # @tra: Core.Dispatch.Timer.Failure
        elapsed_ms = (time.perf_counter() - start) * 1000
        _log_internal(
            target,
            Severity.ERROR,
            f"{description} failed after {elapsed_ms:.2f} ms: {exc}",
            exception_context(exc),
        )
        raise
    # @tra: Core.Dispatch.Timer.Success
    elapsed_ms = (time.perf_counter() - start) * 1000
    _log_internal(target, severity, f"{description} completed in {elapsed_ms:.2f} ms")
    return result


def _build_exception(exc_type: type[BaseException], message: str, code: int) -> BaseException:
    if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
        raise TypeError(f"{exc_type!r} is not an exception type")
    if issubclass(exc_type, LevelogError):
        # Library errors take the logged text as-is instead of building their own.
        return exc_type(message=message, code=code)
    exc = exc_type(message)
    # Keep codes some exception types define themselves (e.g. SystemExit).
    if code or not hasattr(exc, "code"):
        exc.code = code  # type: ignore[attr-defined]
    return exc


def _variant_and_throw(
    target: Any,
    severity: Severity,
    exc_type: type[BaseException],
    message: object,
    context: Mapping[str, Any] | None = None,
    previous: BaseException | None = None,
    code: int = 0,
) -> NoReturn:
    # @tra: Core.Dispatch.AndThrow
    text = str(message)
    _log_internal(target, severity, text, context)
    exc = _build_exception(exc_type, text, code)
    if previous is not None:
        raise exc from previous
    raise exc


_HANDLERS: dict[Variant, Callable[..., Any]] = {
    Variant.STANDARD: _variant_standard,
    Variant.IF: _variant_if,
    Variant.UNLESS: _variant_unless,
    Variant.AND_RETURN: _variant_and_return,
    Variant.WITH_TIMER: _variant_with_timer,
    Variant.AND_THROW: _variant_and_throw,
}


def _run_variant(
    target: Any,
    severity: Severity,
    variant: Variant,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    return _HANDLERS[variant](target, severity, *args, **kwargs)


class LogDispatcher(metaclass=_DispatcherMeta):
    """Convenience logging surface over a logger.

    Hold one as a field and delegate to it. Called on an instance, the
    instance's own logger is used when it has one; otherwise (and always
    when called on the class) the class-level logger, then the registry's
    shared logger. With no logger anywhere, records go to the stdlib
    ``logging`` module under ``levelog.fallback``.

    Args:
        logger: Logger for this instance.
        registry: Registry to fall back to; defaults to the process-wide one.
    """

    _logger: LoggerPort | None = None
    _class_logger: ClassVar[LoggerPort | None] = None
    _registry: ClassVar[LoggerRegistry] = default_registry

    def __init__(
        self,
        logger: LoggerPort | None = None,
        registry: LoggerRegistry | None = None,
    ) -> None:
        self._logger = logger
        if registry is not None:
            self._registry = registry  # type: ignore[misc]

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("log"):
            return _dispatch_by_name(self, name)
        raise AttributeError(name)

    @_hybridmethod
    def dispatch(
        target: Any, severity: Severity | str, variant: Variant | str, *args: Any, **kwargs: Any
    ) -> Any:
        """Run one convenience call.

        Args:
            severity: Severity member or level name.
            variant: Variant member or its value (e.g. "if").
            *args: Positional arguments of the variant.
            **kwargs: Keyword arguments of the variant.

        Raises:
            InvalidSeverity: If severity names no known severity.
            ValueError: If variant names no known variant.
        """
        # @tra: Core.Dispatch.Entry
        return _run_variant(target, parse_severity(severity), Variant(variant), args, kwargs)

    @_hybridmethod
    def call(target: Any, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke a convenience method by name.

        Raises:
            UnknownLogMethod: If the name matches no (severity, variant) pair.
        """
        return _dispatch_by_name(target, name)(*args, **kwargs)

    @_hybridmethod
    def get_logger(target: Any) -> LoggerPort | None:
        """Return the logger calls would go to, or None for the fallback."""
        return _resolve_logger(target)

    @_hybridmethod
    def has_logger(target: Any) -> bool:
        return _resolve_logger(target) is not None

    @_hybridmethod
    def set_logger(target: Any, logger: LoggerPort | None = None) -> None:
        """Set the logger.

        On the class this sets the class-level logger and publishes it as the
        registry's shared logger. On an instance it only affects that
        instance. Passing None adopts the registry's current shared logger.
        """
        if logger is None:
            logger = target._registry.get_shared()
        elif isinstance(target, type):
            target._registry.set_shared(logger)
        if isinstance(target, type):
            target._class_logger = logger
        else:
            target._logger = logger

    @_hybridmethod
    def log(
        target: Any,
        severity: Severity | str,
        message: object,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Log at a severity given at call time."""
        _log_internal(target, parse_severity(severity), message, context)

    @_hybridmethod
    def log_if(
        target: Any,
        condition: object,
        severity: Severity | str,
        message: object,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Log only when condition is truthy."""
        _variant_if(target, parse_severity(severity), condition, message, context)

    @_hybridmethod
    def log_unless(
        target: Any,
        condition: object,
        severity: Severity | str,
        message: object,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Log only when condition is falsy."""
        _variant_unless(target, parse_severity(severity), condition, message, context)

    @_hybridmethod
    def log_and_return(
        target: Any,
        value: Any,
        severity: Severity | str,
        message: object,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """Log, then return value unchanged."""
        return _variant_and_return(target, parse_severity(severity), value, message, context)

    @_hybridmethod
    def log_with_timer(
        target: Any,
        operation: Callable[[], Any],
        description: str = "",
        severity: Severity | str = Severity.INFO,
    ) -> Any:
        """Run operation, log how long it took, and return its result."""
        return _variant_with_timer(target, parse_severity(severity), operation, description)

    @_hybridmethod
    def log_exception(
        target: Any,
        exc: BaseException,
        severity: Severity | str = Severity.ERROR,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Log an exception with its traceback and chained causes.

        The message reads ``Type: message in file:line``; the extracted
        exception details are merged into context.
        """
        # @tra: Core.Dispatch.LogException
        details = exception_context(exc)
        message = (
            f"{details['exception']}: {details['message']} "
            f"in {details['file']}:{details['line']}"
        )
        _log_internal(target, parse_severity(severity), message, {**(context or {}), **details})

    @staticmethod
    def create_debug_context(additional: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Build a context dict with process and caller details under ``_debug``.

        Args:
            additional: Extra fields merged after ``_debug``.
        """
        # @tra: Core.Dispatch.DebugContext
        memory = psutil.Process().memory_info()
        caller = CallerResolver().resolve()
        return {
            "_debug": {
                "memory_usage": memory.rss,
                # Only Windows reports a peak working set.
                "memory_peak": getattr(memory, "peak_wset", memory.rss),
                "timestamp": time.time(),
                "file": caller.file,
                "line": caller.line,
                "function": caller.function,
                "class": caller.enclosing_type,
            },
            **(additional or {}),
        }

    interpolate_message = staticmethod(interpolate_message)


def _make_entry(severity: Severity, variant: Variant) -> _hybridmethod:
    def _generated_entry(target: Any, *args: Any, **kwargs: Any) -> Any:
        return _run_variant(target, severity, variant, args, kwargs)

    name = method_name(severity, variant)
    _generated_entry.__name__ = name
    _generated_entry.__qualname__ = f"LogDispatcher.{name}"
    _generated_entry.__doc__ = f"Log at {severity.value} ({variant.value} variant)."
    return _hybridmethod(_generated_entry)


for _severity in Severity:
    for _variant in Variant:
        setattr(LogDispatcher, method_name(_severity, _variant), _make_entry(_severity, _variant))
del _severity, _variant
