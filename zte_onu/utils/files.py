"""Raw response persistence for offline re-parsing."""

import os
from pathlib import Path

from ..logging_setup import log


def save_file(local_path: Path, content: bytes) -> None:
    """
    Replace *local_path* with *content*.

    The body is written next to the target and renamed over it, so a reader
    never sees a half-written page.  OSError propagates to the caller.
    """
    local_path = Path(local_path)
    local_path.parent.mkdir(parents=True, exist_ok=True)
    partial = local_path.with_name(local_path.name + ".part")
    try:
        partial.write_bytes(content)
        os.replace(partial, local_path)
    finally:
        if partial.exists():
            partial.unlink()
    log.debug("Saved %d bytes of response body to %s", len(content), local_path)


def load_body(local_path: Path) -> str:
    """Read back a body written by :func:`save_file` for replay."""
    return Path(local_path).read_bytes().decode("utf-8", errors="replace")
