"""Vendor tree verification."""
