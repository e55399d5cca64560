"""
Adapters — one PackageManager subclass per supported tool.

system/     OS package managers (apt, dnf, zypper, apk, brew)
languages/  language / environment managers (conda, pip)
"""
