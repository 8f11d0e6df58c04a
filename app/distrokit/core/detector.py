"""Distribution detection.

Reads the os-release file and maps its identifiers to a DistroFamily.
The ID is looked up first; ID_LIKE is only consulted for derivatives
the lookup table does not know.
"""

import logging
import os
from pathlib import Path

from distrokit.core.paths import OS_RELEASE_PATH
from distrokit.errors import DistroSystemError
from distrokit.models.distro import DistroFamily, DistroInfo

logger = logging.getLogger(__name__)

# Environment variable that forces a distro without reading the filesystem
FORCE_DISTRO_ENV = "FORCE_DISTRO"

# Known IDs (distributions and derivatives) per family
KNOWN_IDS: dict[str, DistroFamily] = {
    **dict.fromkeys(
        (
            "debian", "ubuntu", "linuxmint", "mint", "lmde", "pop", "elementary",
            "zorin", "kali", "parrot", "mx", "antix", "devuan", "pureos", "neon",
            "kubuntu", "xubuntu", "lubuntu", "ubuntu-mate", "raspbian", "deepin",
        ),
        DistroFamily.DEBIAN,
    ),
    **dict.fromkeys(
        (
            "arch", "archarm", "manjaro", "manjaro-arm", "endeavouros", "garuda",
            "artix", "arcolinux", "cachyos", "steamos",
        ),
        DistroFamily.ARCH,
    ),
    **dict.fromkeys(
        (
            "fedora", "fedora-asahi-remix", "nobara", "ultramarine", "rhel",
            "centos", "rocky", "almalinux", "ol",
        ),
        DistroFamily.FEDORA,
    ),
    **dict.fromkeys(
        (
            "opensuse", "opensuse-tumbleweed", "opensuse-leap", "opensuse-slowroll",
            "opensuse-microos", "sles", "sled", "suse",
        ),
        DistroFamily.SUSE,
    ),
}  # fmt: skip

# ID_LIKE substrings, checked in order
ID_LIKE_HINTS: tuple[tuple[str, DistroFamily], ...] = (
    ("debian", DistroFamily.DEBIAN),
    ("ubuntu", DistroFamily.DEBIAN),
    ("arch", DistroFamily.ARCH),
    ("fedora", DistroFamily.FEDORA),
    ("rhel", DistroFamily.FEDORA),
    ("suse", DistroFamily.SUSE),
)

# Minimum versions considered supported, by ID
MIN_VERSIONS: dict[str, tuple[int, ...]] = {
    "ubuntu": (22, 4),
    "debian": (11,),
    "fedora": (38,),
}

# Metadata used to build a synthetic DistroInfo for forced distros
_FORCED_PROFILES: dict[str, tuple[str, str, str]] = {
    "debian": ("Debian GNU/Linux", "12", "bookworm"),
    "ubuntu": ("Ubuntu", "24.04", "noble"),
    "arch": ("Arch Linux", "", ""),
    "fedora": ("Fedora Linux", "40", ""),
    "opensuse-tumbleweed": ("openSUSE Tumbleweed", "", ""),
    "suse": ("openSUSE Tumbleweed", "", ""),
}


def parse_os_release(content: str) -> dict[str, str]:
    """Parse os-release content into a key/value mapping.

    Args:
        content: Text of an os-release file.

    Returns:
        Mapping of keys to unquoted values.
    """
    values: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key.strip()] = value
    return values


def family_for(distro_id: str, id_like: str = "") -> DistroFamily:
    """Map os-release identifiers to a family.

    Args:
        distro_id: The ID value.
        id_like: The ID_LIKE value (space-separated).

    Returns:
        The matching DistroFamily, or UNKNOWN.
    """
    family = KNOWN_IDS.get(distro_id.strip().lower())
    if family is not None:
        return family

    like = id_like.lower()
    for hint, hinted_family in ID_LIKE_HINTS:
        if hint in like:
            return hinted_family
    return DistroFamily.UNKNOWN


def _version_tuple(version: str) -> tuple[int, ...] | None:
    """Convert '22.04' into (22, 4); None if not numeric."""
    try:
        return tuple(int(part) for part in version.split("."))
    except ValueError:
        return None


def check_supported(distro_id: str, version_id: str, family: DistroFamily) -> bool:
    """Compute the advisory support flag.

    Args:
        distro_id: Lower-cased ID.
        version_id: VERSION_ID value.
        family: Detected family.

    Returns:
        True if the release is considered supported.
    """
    minimum = MIN_VERSIONS.get(distro_id)
    if minimum is not None:
        version = _version_tuple(version_id)
        return version is not None and version >= minimum

    # Rolling releases and known derivatives
    return family is not DistroFamily.UNKNOWN


class DistroDetector:
    """Detects the running distribution.

    Example:
        >>> info = DistroDetector().detect()
        >>> info.family
        <DistroFamily.FEDORA: 'fedora'>
    """

    def __init__(
        self,
        os_release_path: Path = OS_RELEASE_PATH,
        force_distro: str | None = None,
    ) -> None:
        """Initialize the detector.

        Args:
            os_release_path: Location of the os-release file.
            force_distro: Distro ID to simulate. If None, the FORCE_DISTRO
                environment variable is consulted at detection time.
        """
        self._os_release_path = os_release_path
        self._force_distro = force_distro

    def detect(self) -> DistroInfo:
        """Detect the distribution.

        Returns:
            DistroInfo for the running (or forced) distribution.

        Raises:
            DistroSystemError: If the os-release file cannot be read.
        """
        forced = self._force_distro or os.environ.get(FORCE_DISTRO_ENV)
        if forced:
            return self._forced_info(forced)

        try:
            content = self._os_release_path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Cannot read {self._os_release_path}: {e}"
            raise DistroSystemError(msg) from e

        return self.from_os_release(content)

    @staticmethod
    def from_os_release(content: str) -> DistroInfo:
        """Build a DistroInfo from os-release text."""
        values = parse_os_release(content)
        distro_id = values.get("ID", "").lower()
        id_like = values.get("ID_LIKE", "")
        version_id = values.get("VERSION_ID", "")
        family = family_for(distro_id, id_like)

        info = DistroInfo(
            id=distro_id,
            name=values.get("NAME", distro_id),
            version_id=version_id,
            version_codename=values.get("VERSION_CODENAME", ""),
            id_like=id_like,
            family=family,
            is_supported=check_supported(distro_id, version_id, family),
        )
        logger.debug("Detected %s (family=%s)", info.name, family.value)
        return info

    @staticmethod
    def _forced_info(forced: str) -> DistroInfo:
        """Build a synthetic DistroInfo for a forced distro ID."""
        distro_id = forced.strip().lower()
        family = family_for(distro_id)
        name, version_id, codename = _FORCED_PROFILES.get(distro_id, (forced, "", ""))
        logger.info("Distro forced to %r (family=%s)", distro_id, family.value)
        return DistroInfo(
            id=distro_id,
            name=name,
            version_id=version_id,
            version_codename=codename,
            family=family,
            is_supported=check_supported(distro_id, version_id, family),
            simulated=True,
        )
