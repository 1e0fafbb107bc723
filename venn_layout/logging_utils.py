from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, Mapping, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

from .types import Circle, Point2D, Region

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 8
_repr.maxtuple = 8
_repr.maxdict = 8


def _summarize(value: Any, *, max_items: int = 4) -> str:
    if isinstance(value, np.ndarray):
        if value.size == 0:
            return f"ndarray(shape={tuple(value.shape)})"
        if value.size <= max_items:
            return f"ndarray({_repr.repr(value.tolist())})"
        return (
            f"ndarray(shape={tuple(value.shape)}, min={float(value.min()):.6g}, "
            f"max={float(value.max()):.6g})"
        )
    if isinstance(value, Circle):
        return f"Circle({value.x:.4g}, {value.y:.4g}, r={value.radius:.4g})"
    if isinstance(value, Point2D):
        return f"({value.x:.4g}, {value.y:.4g})"
    if isinstance(value, Region):
        return f"Region({'&'.join(str(s) for s in value.sets)}={value.size:.4g})"
    if isinstance(value, Mapping):
        items = [f"{_summarize(k)}: {_summarize(v)}" for k, v in list(value.items())[:max_items]]
        if len(value) > max_items:
            items.append(f"... ({len(value)} items)")
        return "{" + ", ".join(items) + "}"
    if isinstance(value, (list, tuple)):
        items = [_summarize(item) for item in value[:max_items]]
        if len(value) > max_items:
            items.append(f"... ({len(value)} items)")
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        return open_br + ", ".join(items) + close_br
    if callable(value):
        return f"<{getattr(value, '__qualname__', type(value).__name__)}>"
    return _repr.repr(value)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that traces calls at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug(
                "Entering %s (args=%s kwargs=%s)",
                qualname,
                _summarize(list(args)),
                _summarize(kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, _summarize(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap the public module-level functions of ``namespace`` with :func:`debug_log_call`.

    Private helpers (leading underscore) are left alone; they run inside
    optimizer inner loops and would flood the log.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name if isinstance(module_name, str) else __name__)
    skip_set: Set[str] = set(skip or [])

    for attr, value in list(namespace.items()):
        if attr in skip_set or attr.startswith("_"):
            continue
        if inspect.isfunction(value) and getattr(value, "__module__", None) == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)


__all__ = ["apply_debug_logging", "debug_log_call"]
