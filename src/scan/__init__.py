"""Candidate file scanning."""

from scan.files import collect_candidates, expand_pattern, list_files_recursive

__all__ = ["collect_candidates", "expand_pattern", "list_files_recursive"]
