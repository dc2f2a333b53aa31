"""Flatten structured extraction payloads into "path: value" text lines."""

import math
from collections.abc import Mapping
from typing import Any, Iterator, List, Tuple


def format_scalar(value: Any) -> str:
    """Render a scalar the way it reads in the source JSON (``true``, ``3``, ``2.5``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _child_path(prefix: str, key: Any) -> str:
    return f"{prefix}.{key}" if prefix else str(key)


def iter_lines(value: Any, prefix: str = "") -> Iterator[str]:
    """
    Yield ``"<path>: <value>"`` lines depth-first in the payload's own order.

    Maps keep insertion order and extend the path with ``.key``; sequences use
    ``[index]``. ``None`` is dropped at any depth, as are empty containers. A
    scalar at the top level with no prefix is yielded as its bare text.

    Uses an explicit stack so arbitrarily deep payloads cannot exhaust the
    interpreter's recursion limit.
    """
    if value is None:
        return

    if not isinstance(value, Mapping) and not _is_sequence(value):
        yield f"{prefix}: {format_scalar(value)}" if prefix else format_scalar(value)
        return

    stack: List[Tuple[str, Any]] = [(prefix, value)]
    while stack:
        path, node = stack.pop()
        if node is None:
            continue

        if isinstance(node, Mapping):
            children = [(_child_path(path, key), child) for key, child in node.items()]
        elif _is_sequence(node):
            children = [(f"{path}[{index}]", child) for index, child in enumerate(node)]
        else:
            if path:
                yield f"{path}: {format_scalar(node)}"
            continue

        # reversed so the first child is popped first
        stack.extend(reversed(children))


def linearize(value: Any, prefix: str = "") -> List[str]:
    """Return the ordered list of lines for *value* (see :func:`iter_lines`)."""
    return list(iter_lines(value, prefix))


def linearize_text(value: Any, prefix: str = "") -> str:
    """Return the newline-joined linearization of *value*."""
    return "\n".join(iter_lines(value, prefix))
