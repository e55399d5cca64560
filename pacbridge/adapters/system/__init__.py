"""OS package managers."""

from pacbridge.adapters.system.apk import ApkManager
from pacbridge.adapters.system.apt import AptManager
from pacbridge.adapters.system.brew import BrewManager
from pacbridge.adapters.system.dnf import DnfManager
from pacbridge.adapters.system.zypper import ZypperManager

__all__ = ["ApkManager", "AptManager", "BrewManager", "DnfManager", "ZypperManager"]
