"""
Run use case — from pacman-style flags to one manager operation.

``-Syu`` parses into the operation letter ``S`` and the modifier counts
``{"y": 1, "u": 1}``.  The method name is the lowercase operation letter
followed by the modifiers (each repeated by its count) in sorted order:
``s`` + ``uy`` → ``suy``.  ``-Scc`` → ``scc``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pacbridge.adapters.base import OPERATIONS, PackageManager
from pacbridge.core.errors import ArgParseError

logger = logging.getLogger(__name__)

OPERATION_LETTERS = ("Q", "R", "S", "U")


def operation_name(ops: Sequence[str], modifiers: Mapping[str, int]) -> str:
    """Build the method name for the selected operation and modifiers.

    Raises:
        ArgParseError: No operation, more than one, or an unknown
            combination such as ``-Qy``.
    """
    if not ops:
        raise ArgParseError("no operation specified (use -h for help)")
    if len(set(ops)) > 1:
        raise ArgParseError(f"only one operation may be used at a time: {', '.join(sorted(set(ops)))}")

    letters = "".join(sorted("".join(m * count for m, count in modifiers.items() if count > 0)))
    name = ops[0].lower() + letters
    if name not in OPERATIONS:
        raise ArgParseError(f"invalid flag combination `-{ops[0]}{letters}`")
    return name


def split_extra_flags(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split at the first ``--``: (own args, flags for the underlying tool)."""
    argv = list(argv)
    if "--" not in argv:
        return argv, []
    idx = argv.index("--")
    return argv[:idx], argv[idx + 1:]


def run_operation(pm: PackageManager, op: str, kws: Sequence[str], flags: Sequence[str]) -> None:
    """Dispatch ``op`` on ``pm``.  Errors propagate to the caller."""
    logger.info("Dispatching %s to %s", op, pm.name)
    pm.dispatch(op, kws, flags)
