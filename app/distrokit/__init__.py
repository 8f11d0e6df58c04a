"""distrokit - one package-management interface for four Linux families.

Detects the running distribution family and exposes a uniform
PackageManager for APT, pacman, DNF and zypper.
"""

__version__ = "0.3.0"
