"""
Report generation: build the model, render it and write the HTML file.
"""

import re
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple, Union

from vision_report.core.errors import ReportWriteError
from vision_report.core.logging import get_logger
from vision_report.reporting.builder import ReportModelBuilder
from vision_report.reporting.renderer import TemplateEngine

if TYPE_CHECKING:
    from vision_report.report import VisionReport

HTML_EXTENSIONS = (".html", ".htm")
FILENAME_TIMESTAMP_FORMAT = "%d %b %Y - %I-%M-%S %p"
_ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|]')

logger = get_logger(__name__)


def sanitize_filename(text: str) -> str:
    """Replace characters that are illegal in file names on common filesystems."""
    return _ILLEGAL_FILENAME_CHARS.sub("_", text.strip())


def is_html_file(path: Union[str, Path]) -> bool:
    return str(path).strip().lower().endswith(HTML_EXTENSIONS)


def synthesize_filename(title: Optional[str], now: Optional[datetime] = None, prefix: str = "VR") -> str:
    """Build ``<prefix> - <title> - <dd Mon yyyy - hh-mm-ss AM>.html``."""
    now = now or datetime.now()
    title_part = f" - {sanitize_filename(title)}" if title and title.strip() else ""
    return f"{prefix}{title_part} - {now.strftime(FILENAME_TIMESTAMP_FORMAT)}.html"


def resolve_output_target(
    path: Union[str, Path],
    title: Optional[str],
    now: Optional[datetime] = None,
    prefix: str = "VR",
) -> Tuple[Path, str]:
    """
    Split a caller-supplied target into (folder, file name).

    A path ending in ``.html``/``.htm`` is an exact file; anything else is a
    directory and the file name is synthesized from the title and timestamp.

    Raises:
        ValueError: if ``path`` is blank
    """
    text = str(path).strip() if path is not None else ""
    if not text:
        raise ValueError("Output path cannot be empty")
    target = Path(text)
    if is_html_file(text):
        return target.parent, target.name
    return target, synthesize_filename(title, now, prefix)


def write_report(path: Path, html: str) -> Path:
    """
    Write ``html`` to ``path`` as UTF-8, creating parent directories.

    Raises:
        ReportWriteError: on permission or disk problems
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(f"Could not write report to {path}: {e}") from e
    return path


class ReportGenerator:
    """Generate the HTML report for a ``VisionReport`` session."""

    def __init__(self, builder: Optional[ReportModelBuilder] = None,
                 engine: Optional[TemplateEngine] = None):
        self.builder = builder if builder is not None else ReportModelBuilder()
        self.engine = engine if engine is not None else TemplateEngine()

    def generate(self, report: "VisionReport", file_path: Union[str, Path]) -> Optional[Path]:
        """
        Build, render and write the report.

        Failures are logged and swallowed so a broken report never crashes the
        calling test run.

        Returns:
            Absolute path of the written report, or None if nothing was written
        """
        if report is None:
            raise ValueError("VisionReport cannot be None")
        try:
            model = self.builder.build(report)
            html = self.engine.render(model)
            written = write_report(Path(file_path), html).absolute()
        except Exception as e:
            logger.error(f"Failed to generate report at {file_path}: {e}", exc_info=True)
            return None
        for diagnostic in model.diagnostics:
            logger.debug(f"Report diagnostic: {diagnostic}")
        logger.info(f"Report generated at: {written}")
        return written
