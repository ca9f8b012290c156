from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Protocol

from tack.config import SOURCE_SUFFIX, get_prelude_roots

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


# Map a dotted name to a .tk file underneath one of the prelude roots

def _name_to_relpath(name: str) -> Path:
    return Path(*name.split('.')).with_suffix(SOURCE_SUFFIX)


def resolve_prelude(name: str) -> Optional[Path]:
    rel = _name_to_relpath(name)
    for root in get_prelude_roots():
        candidate = root / rel
        if candidate.is_file():
            return candidate
    return None


def load_module(itp: _HasEvalPrelude, name: str) -> None:
    p = resolve_prelude(name)
    if p is None:
        raise FileNotFoundError(f"Cannot find prelude module '{name}' in TACK_PRELUDE_PATH")
    logger.debug("loading prelude module %s from %s", name, p)
    itp.eval_prelude(p.read_text(encoding='utf-8'))


# Prelude convenience loader (core, then an optional user.tk beside it)

def load_prelude(itp: _HasEvalPrelude) -> None:
    load_module(itp, 'core')
    if resolve_prelude('user') is not None:
        load_module(itp, 'user')
