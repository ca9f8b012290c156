"""Environment configuration.

TACK_PATH          roots searched by `load` for source files (default: cwd)
TACK_PRELUDE_PATH  directories searched for prelude modules, first match
                   wins (default: the prelude shipped with the package)

Both are path lists in the platform's PATH syntax (os.pathsep).
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


# Resolve installation dir (tack package directory)
_TACK_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIRS = [_TACK_DIR / 'prelude']
_DEFAULT_SOURCE_DIRS = [Path('.')]

SOURCE_SUFFIX = '.tk'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_source_roots() -> List[Path]:
    return paths_from_env('TACK_PATH', _DEFAULT_SOURCE_DIRS)


def get_prelude_roots() -> List[Path]:
    # Keep only directories; a stale entry must not hide the ones after it
    return [p for p in paths_from_env('TACK_PRELUDE_PATH', _DEFAULT_PRELUDE_DIRS) if p.is_dir()]
