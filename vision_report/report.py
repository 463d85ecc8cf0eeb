"""
The report session: the object callers create, populate and flush.

Example::

    report = VisionReport()
    report.config().set_title("UI Regression").set_environment("Staging")
    report.create_test("Login").assign_category("Smoke").log(Status.PASS, "Signed in")
    report.flush("reports/")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from vision_report.api.testcase import IdSequence, Test
from vision_report.core.config import ReportConfig
from vision_report.core.logging import get_logger
from vision_report.reporting.builder import ReportModelBuilder
from vision_report.reporting.generator import ReportGenerator, resolve_output_target
from vision_report.reporting.media import MediaResolver
from vision_report.reporting.renderer import TemplateEngine

NOT_PROVIDED = "Not provided"

logger = get_logger(__name__)


@dataclass(frozen=True)
class SystemInfo:
    """One key/value entry of report metadata."""
    key: str
    value: str = ""

    def __post_init__(self):
        if self.key is None or not self.key.strip():
            raise ValueError("SystemInfo key cannot be None or empty")
        object.__setattr__(self, "key", self.key.strip())
        object.__setattr__(self, "value", "" if self.value is None else self.value.strip())

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


class ReportSettings:
    """Fluent configuration of report-level metadata, obtained from ``VisionReport.config()``."""

    def __init__(self, report: "VisionReport"):
        if report is None:
            raise ValueError("VisionReport reference cannot be None")
        self._report = report

    def set_title(self, title: Optional[str]) -> "ReportSettings":
        self._report._set_title(title)
        return self

    def set_project_name(self, name: Optional[str]) -> "ReportSettings":
        self._report._add_system_info("standard_project", name)
        return self

    def set_application_name(self, name: Optional[str]) -> "ReportSettings":
        self._report._add_system_info("standard_application", name)
        return self

    def set_environment(self, environment: Optional[str]) -> "ReportSettings":
        self._report._add_system_info("standard_environment", environment)
        return self

    def set_tester_name(self, tester_name: Optional[str]) -> "ReportSettings":
        self._report._add_system_info("standard_tester", tester_name)
        return self

    def set_browser(self, browser: Optional[str]) -> "ReportSettings":
        self._report._add_system_info("standard_browser", browser)
        return self

    def add_custom_info(self, key: str, value: Optional[str]) -> "ReportSettings":
        if key is None or not key.strip():
            raise ValueError("Custom info key cannot be None or empty")
        self._report._add_system_info(key, value)
        return self


class VisionReport:
    """
    A report session.

    Owns its tests, its id sequence and its template engine; nothing is
    shared between sessions. Population is single-threaded: create tests and
    log steps from one caller at a time.
    """

    def __init__(self, config: Optional[ReportConfig] = None, engine: Optional[TemplateEngine] = None):
        self._config = config if config is not None else ReportConfig()
        self._engine = engine if engine is not None else TemplateEngine(
            template_dir=self._config.template_dir,
            template_name=self._config.template_name,
        )
        self._title = self._config.default_title
        self._system_info: List[SystemInfo] = []
        self._tests: List[Test] = []
        self._ids = IdSequence()
        self._settings = ReportSettings(self)
        self._flush_in_progress = False

    def config(self) -> ReportSettings:
        return self._settings

    @property
    def title(self) -> str:
        return self._title

    @property
    def system_info(self) -> Tuple[SystemInfo, ...]:
        return tuple(self._system_info)

    @property
    def tests(self) -> Tuple[Test, ...]:
        return tuple(self._tests)

    def create_test(
        self,
        name: Optional[str] = None,
        test_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Test:
        """Create a test in this session. A blank name becomes ``Untitled Test``."""
        test = Test(name, test_id=test_id, description=description, id_sequence=self._ids)
        self._tests.append(test)
        return test

    def _set_title(self, title: Optional[str]) -> None:
        if title is not None and title.strip():
            self._title = title.strip()

    def _add_system_info(self, key: Optional[str], value: Optional[str]) -> None:
        if key is None or not key.strip():
            return
        safe_value = value.strip() if value is not None and value.strip() else NOT_PROVIDED
        self._system_info.append(SystemInfo(key, safe_value))

    def _generator(self) -> ReportGenerator:
        resolver = MediaResolver(default_mime_type=self._config.default_mime_type)
        return ReportGenerator(builder=ReportModelBuilder(media_resolver=resolver), engine=self._engine)

    def flush(self, path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """
        Generate the HTML report.

        Args:
            path: An exact ``.html``/``.htm`` file, or a directory in which a
                timestamped file name is synthesized. Defaults to the
                configured output directory.

        Returns:
            Path of the written report, or None if no report was produced.
            Never raises: failures are printed to stderr.
        """
        if self._flush_in_progress:
            logger.warning("flush() called while a flush is already in progress; ignoring")
            return None
        self._flush_in_progress = True
        try:
            target = str(path).strip() if path is not None else ""
            return self._flush_to(target or self._config.output_dir, allow_fallback=True)
        finally:
            self._flush_in_progress = False

    def _flush_to(self, target: str, allow_fallback: bool) -> Optional[Path]:
        default_dir = self._config.output_dir
        try:
            folder, file_name = resolve_output_target(
                target, self._title, prefix=self._config.filename_prefix,
            )
            folder.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            logger.error(f"Invalid output path {target!r}: {e}")
            if allow_fallback and target != default_dir:
                logger.warning(f"Falling back to default output directory: {default_dir}")
                return self._flush_to(default_dir, allow_fallback=False)
            return None
        return self._generator().generate(self, folder / file_name)

    def __repr__(self) -> str:
        return f"VisionReport(title={self._title!r}, tests={len(self._tests)})"
