"""RPM database queries shared by the Fedora and SUSE adapters."""

import logging
from collections.abc import Callable

from distrokit.errors import CommandFailedError
from distrokit.managers.base import PackageManager
from distrokit.models.package import PackageRecord

logger = logging.getLogger(__name__)

# Name, version-release, size (bytes), summary
RPM_QUERY_FORMAT = "%{NAME}\\t%{VERSION}-%{RELEASE}\\t%{SIZE}\\t%{SUMMARY}\\n"


class RpmPackageManager(PackageManager):
    """Base for adapters that read installed packages from rpm."""

    def _is_auto(self, name: str, context: set[str] | None) -> bool:
        """Decide whether a package was installed as a dependency."""
        return False

    async def _auto_context(self) -> set[str] | None:
        """Fetch whatever _is_auto needs, queried before the rpm listing."""
        return None

    async def _list_installed(self) -> list[PackageRecord]:
        """Query the rpm database.

        Raises:
            CommandFailedError: If rpm fails.
        """
        context = await self._auto_context()

        result = await self._query(["rpm", "-qa", "--queryformat", RPM_QUERY_FORMAT])
        if not result.success:
            msg = f"rpm query failed: {result.stderr.strip() or 'unknown error'}"
            raise CommandFailedError(msg, stderr=result.stderr)

        return self.parse_rpm_output(result.stdout, lambda name: self._is_auto(name, context))

    @classmethod
    def parse_rpm_output(
        cls,
        output: str,
        is_auto: Callable[[str], bool],
    ) -> list[PackageRecord]:
        """Parse rpm --queryformat output.

        Args:
            output: Tab-separated rpm output.
            is_auto: Decides auto-installed status from a package name.

        Returns:
            One record per line with at least four fields.
        """
        records: list[PackageRecord] = []
        for line in output.splitlines():
            parts = line.split("\t")
            if len(parts) < 4 or not parts[0].strip():
                if line.strip():
                    logger.debug("Skipping malformed rpm line: %r", line[:100])
                continue

            name = parts[0].strip()
            size_str = parts[2].strip()
            records.append(
                cls._record(
                    name=name,
                    version=parts[1].strip(),
                    # rpm already reports bytes
                    size_bytes=int(size_str) if size_str.isdigit() else 0,
                    description=parts[3].strip(),
                    is_auto=is_auto(name),
                )
            )
        return records
