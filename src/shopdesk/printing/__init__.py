"""Printable HTML documents.

``render_document`` turns a ``ReportDocument`` into a self-contained page
(inline CSS, page breaks, auto-print script). ``open_print_surface`` writes
that page to disk and hands it to the platform browser.
"""

import logging
import os
import tempfile
import webbrowser
from pathlib import Path
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from shopdesk.domain.errors import PrintSurfaceError
from shopdesk.domain.reporting import ReportDocument

logger = logging.getLogger(__name__)

_env = Environment(
    loader=PackageLoader("shopdesk.printing", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_document(doc: ReportDocument, auto_print: bool = True) -> str:
    """Render a report document to standalone HTML.

    Args:
        doc: Document to render
        auto_print: If True, the page opens the print dialog once loaded

    Returns:
        HTML string
    """
    return _env.get_template("document.html").render(doc=doc, auto_print=auto_print)


def open_print_surface(html: str, path: Optional[str] = None, launch: bool = True) -> Path:
    """Write a rendered document and open it in the browser.

    Args:
        html: Rendered document
        path: Target file (defaults to a new file in the temp directory)
        launch: If False, only write the file

    Returns:
        Path of the written document

    Raises:
        PrintSurfaceError: If the file cannot be written or no browser opens it.
            The file is removed again in that case.
    """
    if path is None:
        fd, path = tempfile.mkstemp(prefix="shopdesk-", suffix=".html")
        os.close(fd)
    target = Path(path)

    try:
        target.write_text(html, encoding="utf-8")
    except OSError as exc:
        logger.exception("Could not write print document to %s", target)
        target.unlink(missing_ok=True)
        raise PrintSurfaceError(f"Could not write print document: {exc}") from exc

    if not launch:
        return target

    try:
        opened = webbrowser.open(target.resolve().as_uri())
    except webbrowser.Error as exc:
        opened = False
        logger.warning("Browser failed to open %s: %s", target, exc)
    if not opened:
        target.unlink(missing_ok=True)
        raise PrintSurfaceError("Could not open the print window. Check that a browser is available.")

    logger.info("Opened print document %s", target)
    return target
