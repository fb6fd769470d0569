"""Vendoring entry points."""

from vendoring.copier import copy_tree, vendor_local_path
from vendoring.write import VendorResult, plan_vendor, run_vendor

__all__ = [
    "VendorResult",
    "copy_tree",
    "plan_vendor",
    "run_vendor",
    "vendor_local_path",
]
