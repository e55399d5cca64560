"""Engine — strategy mediation, process execution and output filtering."""

from pacbridge.core.engine.executor import Executor, SubprocessExecutor
from pacbridge.core.engine.search import grep, grep_with_header
from pacbridge.core.engine.strategy import StrategyEngine

__all__ = [
    "Executor",
    "StrategyEngine",
    "SubprocessExecutor",
    "grep",
    "grep_with_header",
]
