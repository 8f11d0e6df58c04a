"""Package manager adapters for the supported distribution families.

This module exports the PackageManager interface and one adapter per
family.
"""

from distrokit.managers.arch import ArchAdapter
from distrokit.managers.base import PackageManager
from distrokit.managers.debian import DebianAdapter
from distrokit.managers.fedora import FedoraAdapter
from distrokit.managers.suse import SuseAdapter

__all__ = ["ArchAdapter", "DebianAdapter", "FedoraAdapter", "PackageManager", "SuseAdapter"]
