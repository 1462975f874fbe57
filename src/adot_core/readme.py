from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

FOOTER_MARKER = "<!-- adot:footer -->"
FOOTER_TEXT = "<sub>Status and location updates posted with adot.</sub>"


def render_footer() -> str:
    return f"{FOOTER_MARKER}\n---\n{FOOTER_TEXT}\n"


def ensure_footer(path: Union[str, Path]) -> bool:
    """Append the attribution footer unless the marker is already present.

    Returns True when the file was written. A missing README is created with
    just the footer.
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8") if p.exists() else ""
    if FOOTER_MARKER in text:
        log.debug("footer already present in %s", p)
        return False
    if text and not text.endswith("\n"):
        text += "\n"
    if text:
        text += "\n"
    p.write_text(text + render_footer(), encoding="utf-8")
    log.info("footer appended to %s", p)
    return True
