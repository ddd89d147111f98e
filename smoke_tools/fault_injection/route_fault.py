"""
================================================================================
Route Fault Injection
================================================================================

Temporarily disables one storefront route so the smoke suite can prove it
detects a missing page.

A Next.js app-router page file is moved aside:

    page.tsx          -> page.tsx.disabled   (route now answers 404)
    page.tsx (copy)   -> page.tsx.backup     (restore source)

Restoring copies the backup back, removes the disabled file and (by default)
deletes the backup.

Usage:
    fault = RouteFault("/srv/storefront")
    fault.inject()
    ...
    fault.restore()

    with RouteFault("/srv/storefront"):
        ...  # route disabled inside the block

================================================================================
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from smoke_suites.storefront.framework.config_loader import ConfigLoader


DEFAULT_ROUTE_FILE = "src/app/[channel]/(main)/cart/page.tsx"
BACKUP_SUFFIX = ".backup"
DISABLED_SUFFIX = ".disabled"

# Restored page files are expected to keep their default export
INTEGRITY_MARKER = "export default"


class FaultInjectionError(Exception):
    """Raised when a fault cannot be injected or restored."""
    pass


@dataclass
class FaultState:
    """Which of the three route files currently exist."""
    page_exists: bool
    backup_exists: bool
    disabled_exists: bool

    @property
    def injected(self) -> bool:
        return not self.page_exists and self.backup_exists and self.disabled_exists

    def describe(self) -> str:
        def mark(flag: bool) -> str:
            return "present" if flag else "absent"

        return (
            f"page={mark(self.page_exists)}, "
            f"backup={mark(self.backup_exists)}, "
            f"disabled={mark(self.disabled_exists)}"
        )


class RouteFault:
    """
    Route fault for one page file inside a storefront checkout.

    Args:
        storefront_dir: Storefront project root
        route_file: Page file relative to the project root
    """

    def __init__(
        self,
        storefront_dir: Union[str, Path],
        route_file: str = DEFAULT_ROUTE_FILE,
    ):
        self.storefront_dir = Path(storefront_dir)
        self.page_file = self.storefront_dir / route_file
        self.backup_file = self.page_file.with_name(self.page_file.name + BACKUP_SUFFIX)
        self.disabled_file = self.page_file.with_name(self.page_file.name + DISABLED_SUFFIX)

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "RouteFault":
        """
        Build from `fault_injection.*` settings.

        Raises:
            FaultInjectionError: No storefront directory configured
        """
        config = config or ConfigLoader()
        storefront_dir = config.get("fault_injection.storefront_dir", "")
        if not storefront_dir:
            raise FaultInjectionError(
                "fault_injection.storefront_dir is not set "
                "(FAULT_INJECTION_STOREFRONT_DIR)"
            )
        return cls(
            storefront_dir,
            config.get("fault_injection.cart_page", DEFAULT_ROUTE_FILE),
        )

    def __repr__(self) -> str:
        return f"RouteFault({str(self.page_file)!r})"

    def __enter__(self) -> "RouteFault":
        self.inject()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.restore()

    def status(self) -> FaultState:
        return FaultState(
            page_exists=self.page_file.is_file(),
            backup_exists=self.backup_file.is_file(),
            disabled_exists=self.disabled_file.is_file(),
        )

    def _require_storefront_dir(self) -> None:
        if not self.storefront_dir.is_dir():
            raise FaultInjectionError(f"Storefront directory not found: {self.storefront_dir}")

    def inject(self, overwrite: bool = False) -> FaultState:
        """
        Disable the route.

        Args:
            overwrite: Replace an existing backup file

        Raises:
            FaultInjectionError: Missing page file, existing backup, or
                a filesystem operation failed
        """
        self._require_storefront_dir()
        if not self.page_file.is_file():
            raise FaultInjectionError(f"Page file not found: {self.page_file}")
        if self.backup_file.exists() and not overwrite:
            raise FaultInjectionError(
                f"Backup already exists: {self.backup_file} (restore first or pass overwrite)"
            )

        logger.info(f"Creating backup: {self.backup_file}")
        shutil.copy2(self.page_file, self.backup_file)

        logger.info(f"Disabling route file: {self.page_file.name} -> {self.disabled_file.name}")
        try:
            self.page_file.replace(self.disabled_file)
        except OSError as e:
            raise FaultInjectionError(f"Failed to disable {self.page_file}: {e}") from e

        state = self.status()
        if not state.injected:
            raise FaultInjectionError(f"Fault injection could not be verified ({state.describe()})")

        logger.warning(f"⚠️ Route fault injected: {self.page_file}")
        return state

    def restore(self, keep_backup: bool = False, overwrite: bool = False) -> FaultState:
        """
        Re-enable the route.

        Args:
            keep_backup: Leave the backup file in place
            overwrite: Replace an existing page file with the backup

        Raises:
            FaultInjectionError: Neither backup nor page file exists
        """
        self._require_storefront_dir()

        if not self.backup_file.is_file():
            if self.page_file.is_file():
                logger.info(f"No backup found, page file already present: {self.page_file}")
                return self.status()
            raise FaultInjectionError(
                f"Neither page file nor backup exists, cannot restore: {self.page_file}"
            )

        if self.page_file.exists() and not overwrite:
            logger.info(f"Page file already present, keeping it: {self.page_file}")
        else:
            shutil.copy2(self.backup_file, self.page_file)
            logger.info(f"Page file restored from backup: {self.page_file}")

        if self.disabled_file.exists():
            self.disabled_file.unlink()
            logger.debug(f"Removed disabled file: {self.disabled_file}")

        if keep_backup:
            logger.info(f"Keeping backup: {self.backup_file}")
        else:
            self.backup_file.unlink()

        if INTEGRITY_MARKER not in self.page_file.read_text(encoding="utf-8", errors="replace"):
            logger.warning(f"Restored page file has no '{INTEGRITY_MARKER}', check it manually")

        logger.info(f"✅ Route restored: {self.page_file}")
        return self.status()


__all__ = [
    "RouteFault",
    "FaultState",
    "FaultInjectionError",
    "DEFAULT_ROUTE_FILE",
]
