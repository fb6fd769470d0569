"""Data model for parsed manifest entries."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class VendorSet:
    """Candidate files of one module and the subset confirmed as used.

    ``confirmed`` is always a subset of ``candidates``.
    """

    candidates: frozenset[str] = field(default_factory=frozenset)
    confirmed: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_candidates(cls, paths: Iterable[str]) -> VendorSet:
        return cls(candidates=frozenset(paths))

    def confirm(self, paths: set[str] | frozenset[str]) -> VendorSet:
        return VendorSet(
            candidates=self.candidates,
            confirmed=self.confirmed | (frozenset(paths) & self.candidates),
        )

    def pruned(self) -> VendorSet:
        """Drop every candidate that was never confirmed."""
        return VendorSet(candidates=self.confirmed, confirmed=self.confirmed)

    def files(self) -> list[str]:
        return sorted(self.confirmed)

    def __len__(self) -> int:
        return len(self.confirmed)


@dataclass(frozen=True)
class ModuleRecord:
    """One dependency module resolved to its source directory."""

    import_path: str
    version: str
    dir: Path
    source_path: str = ""
    source_version: str = ""
    used_subpaths: tuple[str, ...] = ()
    vendor_set: VendorSet = field(default_factory=VendorSet)

    @property
    def is_replaced(self) -> bool:
        return bool(self.source_path)

    @property
    def is_local_replace(self) -> bool:
        return self.is_replaced and not self.source_version

    def with_subpath(self, subpath: str) -> ModuleRecord:
        return replace(self, used_subpaths=(*self.used_subpaths, subpath))


__all__ = ["ModuleRecord", "VendorSet"]
