"""
Strategy models — how an Invocation should be mediated.

A Strategy is attached at call time.  It never rewrites keywords: it
only adds wrapper arguments (elevation), appends the flags it declares
(prompt / dry-run / no-cache), or decides whether a process is spawned
at all.

Prompt kinds:
    none               no mediation
    native_no_confirm  append the tool's "assume yes" flags
    native_confirm     leave (or enable, via flags) the tool's own prompt
    custom_confirm     pacbridge asks the user before spawning
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ExecMode(StrEnum):
    """Execution modes."""

    DRY_RUN = "dry_run"            # render, never spawn
    RUN = "run"                    # spawn
    CHECK_DRY_RUN = "check_dry_run"  # spawn, but never ask for confirmation


class PromptStrategy(BaseModel):
    """How confirmation is obtained."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none", "native_no_confirm", "native_confirm", "custom_confirm"] = "none"
    flags: tuple[str, ...] = ()
    prompt: str = "Proceed with installation?"

    @classmethod
    def none(cls) -> PromptStrategy:
        return cls()

    @classmethod
    def native_no_confirm(cls, flags: Iterable[str]) -> PromptStrategy:
        return cls(kind="native_no_confirm", flags=tuple(flags))

    @classmethod
    def native_confirm(cls, flags: Iterable[str] = ()) -> PromptStrategy:
        return cls(kind="native_confirm", flags=tuple(flags))

    @classmethod
    def custom_confirm(cls, prompt: str = "Proceed with installation?") -> PromptStrategy:
        return cls(kind="custom_confirm", prompt=prompt)


class DryRunStrategy(BaseModel):
    """What ``--dry-run`` means for an invocation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["print_cmd", "with_flags"] = "print_cmd"
    flags: tuple[str, ...] = ()

    @classmethod
    def print_cmd(cls) -> DryRunStrategy:
        return cls()

    @classmethod
    def with_flags(cls, flags: Iterable[str]) -> DryRunStrategy:
        """Let the tool simulate by itself (``apt install --dry-run``)."""
        return cls(kind="with_flags", flags=tuple(flags))


class NoCacheStrategy(BaseModel):
    """Cache cleanup after an install when ``no_cache`` is set."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none", "sc", "scc", "sccc", "with_flags"] = "none"
    flags: tuple[str, ...] = ()

    @classmethod
    def none(cls) -> NoCacheStrategy:
        return cls()

    @classmethod
    def sc(cls) -> NoCacheStrategy:
        return cls(kind="sc")

    @classmethod
    def scc(cls) -> NoCacheStrategy:
        return cls(kind="scc")

    @classmethod
    def sccc(cls) -> NoCacheStrategy:
        return cls(kind="sccc")

    @classmethod
    def with_flags(cls, flags: Iterable[str]) -> NoCacheStrategy:
        return cls(kind="with_flags", flags=tuple(flags))


class Strategy(BaseModel):
    """Full mediation policy for one Invocation."""

    model_config = ConfigDict(frozen=True)

    prompt: PromptStrategy = Field(default_factory=PromptStrategy)
    dry_run: DryRunStrategy = Field(default_factory=DryRunStrategy)
    no_cache: NoCacheStrategy = Field(default_factory=NoCacheStrategy)
    elevate: bool = False
    preserve_env: tuple[str, ...] = ()   # env vars re-injected under elevation

    def elevated(self, preserve_env: Iterable[str] = ()) -> Strategy:
        return self.model_copy(update={"elevate": True, "preserve_env": tuple(preserve_env)})
