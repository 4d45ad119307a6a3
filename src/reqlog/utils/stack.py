r"""Debug stack traces stored in request log records."""

from __future__ import annotations

__all__ = ["get_stack"]

import inspect
import reprlib
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from types import FrameType

_PACKAGE = __name__.split(".", 1)[0]

_repr = reprlib.Repr()
_repr.maxstring = 200
_repr.maxother = 200


def _is_library_frame(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == _PACKAGE or module.startswith(f"{_PACKAGE}.")


def _frame_args(frame: FrameType) -> dict[str, str]:
    info = inspect.getargvalues(frame)
    names = list(info.args)
    if info.varargs:
        names.append(info.varargs)
    if info.keywords:
        names.append(info.keywords)
    return {name: _repr.repr(info.locals[name]) for name in names if name in info.locals}


def get_stack(extended: bool = False, limit: int | None = None) -> list[dict[str, Any]]:
    """Return the current call stack for a log record.

    Frames that belong to this library are skipped, so the first frame
    is the code that issued the request. Without extended debugging
    each frame only identifies the call site; with it, each frame also
    carries the ``repr`` of its argument values.

    Args:
        extended: If ``True``, include argument values.
        limit: Optional maximum number of frames.

    Returns:
        The frames, innermost first. Each frame is a dictionary with
        ``file``, ``line`` and ``function`` keys, plus ``args`` when
        ``extended`` is ``True``.

    Example:
        ```pycon
        >>> from reqlog.utils.stack import get_stack
        >>> sorted(get_stack(limit=1)[0])
        ['file', 'function', 'line']
        >>> sorted(get_stack(extended=True, limit=1)[0])
        ['args', 'file', 'function', 'line']

        ```
    """
    stack: list[dict[str, Any]] = []
    frame = inspect.currentframe()
    try:
        while frame is not None and (limit is None or len(stack) < limit):
            if not _is_library_frame(frame):
                entry: dict[str, Any] = {
                    "file": frame.f_code.co_filename,
                    "line": frame.f_lineno,
                    "function": frame.f_code.co_name,
                }
                if extended:
                    entry["args"] = _frame_args(frame)
                stack.append(entry)
            frame = frame.f_back
    finally:
        # Break the reference cycle between this frame and its locals
        del frame
    return stack
