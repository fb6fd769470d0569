"""Module cache path encoding."""

from modpath.codec import (
    default_gopath,
    encode_path,
    module_cache_dir,
    module_cache_root,
)

__all__ = [
    "default_gopath",
    "encode_path",
    "module_cache_dir",
    "module_cache_root",
]
