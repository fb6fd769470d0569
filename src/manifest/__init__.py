"""Manifest parsing and module records."""

from manifest.models import ModuleRecord, VendorSet
from manifest.parser import ParseOptions, parse_manifest, read_manifest

__all__ = [
    "ModuleRecord",
    "ParseOptions",
    "VendorSet",
    "parse_manifest",
    "read_manifest",
]
