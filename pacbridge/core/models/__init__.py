"""
Domain models — Pydantic types for the engine.

All models are re-exported here for convenient access:

    from pacbridge.core.models import Invocation, Strategy, ExecutionOutcome
"""

from pacbridge.core.models.invocation import Invocation
from pacbridge.core.models.outcome import ExecutionOutcome
from pacbridge.core.models.strategy import (
    DryRunStrategy,
    ExecMode,
    NoCacheStrategy,
    PromptStrategy,
    Strategy,
)

__all__ = [
    "DryRunStrategy",
    "ExecMode",
    # outcome.py
    "ExecutionOutcome",
    # invocation.py
    "Invocation",
    "NoCacheStrategy",
    "PromptStrategy",
    # strategy.py
    "Strategy",
]
