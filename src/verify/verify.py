"""Check an existing vendor tree against the current vendoring plan."""

from __future__ import annotations

import filecmp
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rules.config import load_config, vendor_root
from vendoring.copier import VENDOR_FILE_MODE, iter_tree_files, vendor_local_path
from vendoring.write import plan_vendor

if TYPE_CHECKING:
    from rules.config import ModVendorConfig


@dataclass(frozen=True)
class VendorCheckResult:
    ok: bool
    missing: tuple[str, ...] = field(default_factory=tuple)
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    bad_modes: tuple[str, ...] = field(default_factory=tuple)


def verify_vendor_tree(
    *, root: Path, config: ModVendorConfig | None = None
) -> VendorCheckResult:
    """Verify that the vendor tree holds exactly what a fresh run would copy.

    Every planned file must exist under ``<root>/vendor``, match its source
    byte-for-byte and carry the normalised file mode. Files in the vendor tree
    that are not part of the plan (for example those written by
    ``go mod vendor``) are ignored.

    Args:
        root: Project root containing go.mod
        config: Optional configuration; loaded from modvendor.toml when omitted

    Returns:
        VendorCheckResult with ok status and sorted lists of missing,
        mismatched and wrongly-permissioned local paths.
    """
    if config is None:
        config = load_config(root)

    destination_root = vendor_root(root)
    missing: set[str] = set()
    mismatches: set[str] = set()
    bad_modes: set[str] = set()

    for module in plan_vendor(root=root, config=config):
        for file_path in module.vendor_set.files():
            local_root = destination_root / vendor_local_path(module, file_path)
            for source, destination in iter_tree_files(Path(file_path), local_root):
                local_path = destination.relative_to(destination_root).as_posix()
                if not destination.is_file():
                    missing.add(local_path)
                    continue
                if not filecmp.cmp(source, destination, shallow=False):
                    mismatches.add(local_path)
                if stat.S_IMODE(destination.stat().st_mode) != VENDOR_FILE_MODE:
                    bad_modes.add(local_path)

    ok = not missing and not mismatches and not bad_modes
    return VendorCheckResult(
        ok=ok,
        missing=tuple(sorted(missing)),
        mismatches=tuple(sorted(mismatches)),
        bad_modes=tuple(sorted(bad_modes)),
    )


__all__ = ["VendorCheckResult", "verify_vendor_tree"]
