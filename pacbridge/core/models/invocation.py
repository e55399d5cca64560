"""
Invocation model — an immutable description of a command line.

An Invocation is built by a package-manager definition and handed to
the engine.  Nothing here touches the OS: every builder method returns
a new Invocation and leaves the original untouched.

Layout of the final argument vector::

    prefix... program args... flags... keywords...

Flags go before keywords because some tools (zypper) reject options
that follow positional package names.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Invocation(BaseModel):
    """A program plus ordered base arguments, flags and keywords."""

    model_config = ConfigDict(frozen=True)

    program: str
    args: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()     # user-supplied package names / terms
    flags: tuple[str, ...] = ()        # user-supplied options
    prefix: tuple[str, ...] = ()       # wrapper args, e.g. ("sudo",)

    @classmethod
    def new(cls, program: str | Sequence[str], *args: str) -> Invocation:
        """Create an Invocation.

        Accepts either ``new("apt", "install")`` or
        ``new(["apt", "install"])``.
        """
        if isinstance(program, str):
            parts = [program, *args]
        else:
            parts = [*program, *args]
        if not parts or not parts[0]:
            raise ValueError("An invocation needs a program name")
        return cls(program=parts[0], args=tuple(parts[1:]))

    # ── Builders ─────────────────────────────────────────────────

    def with_keywords(self, keywords: Iterable[str]) -> Invocation:
        """Append keyword arguments."""
        return self.model_copy(update={"keywords": self.keywords + tuple(keywords)})

    def with_flags(self, flags: Iterable[str]) -> Invocation:
        """Append flag arguments."""
        return self.model_copy(update={"flags": self.flags + tuple(flags)})

    def with_program(self, program: str) -> Invocation:
        """Substitute the program name (``pip`` → ``pip3``)."""
        return self.model_copy(update={"program": program})

    def elevated(
        self,
        command: str | Sequence[str],
        env: Iterable[tuple[str, str]] = (),
    ) -> Invocation:
        """Wrap the invocation in a privilege-escalation program.

        ``env`` pairs are re-injected through ``env NAME=value`` for
        programs that lose their PATH context under sudo.
        """
        wrapper = shlex.split(command) if isinstance(command, str) else list(command)
        pairs = [f"{name}={value}" for name, value in env]
        if pairs:
            wrapper += ["env", *pairs]
        return self.model_copy(update={"prefix": tuple(wrapper) + self.prefix})

    def transform(self, fn: Callable[[Invocation], Invocation]) -> Invocation:
        """Apply a wrapping function, returning the new Invocation."""
        result = fn(self)
        if not isinstance(result, Invocation):
            raise TypeError(
                f"transform() expects an Invocation, got {type(result).__name__}"
            )
        return result

    def pipe(self, fn: Callable[[Invocation], T]) -> T:
        """Hand this Invocation to ``fn``: ``inv.pipe(self.run)``."""
        return fn(self)

    # ── Views ────────────────────────────────────────────────────

    @property
    def argv(self) -> list[str]:
        """The full argument vector that would be spawned."""
        return [*self.prefix, self.program, *self.args, *self.flags, *self.keywords]

    @property
    def is_elevated(self) -> bool:
        return bool(self.prefix)

    def render(self) -> str:
        """Shell-quoted display string of ``argv``."""
        return shlex.join(self.argv)

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        return {"argv": self.argv, "keywords": list(self.keywords), "flags": list(self.flags)}
