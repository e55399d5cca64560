"""Language and environment package managers."""

from pacbridge.adapters.languages.conda import CondaManager
from pacbridge.adapters.languages.pip import PipManager

__all__ = ["CondaManager", "PipManager"]
