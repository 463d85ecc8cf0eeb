"""
Populate a report session from a YAML or JSON suite description.

Example suite::

    title: Nightly Regression
    system_info:
      standard_environment: Staging
      Build Number: 1.0.0
    tests:
      - name: Login
        categories: [Smoke, Authentication]
        logs:
          - {status: PASS, name: Open login page}
          - status: FAIL
            name: Submit form
            details: Server returned 500
            media: {path: screenshots/login.png}
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from vision_report.api.media import MediaProvider
from vision_report.api.status import Status
from vision_report.api.testcase import Test
from vision_report.core.config import ReportConfig
from vision_report.core.errors import ConfigurationError
from vision_report.core.logging import get_logger
from vision_report.report import VisionReport

logger = get_logger(__name__)


def load_suite(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a suite description from ``path``.

    Raises:
        ConfigurationError: if the file cannot be read or is not a mapping
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read suite file: {path}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Suite file must contain a mapping at the top level: {path}")
    return data


def _media_from_spec(spec: Optional[Dict[str, Any]], base_dir: Path) -> Optional[MediaProvider]:
    if not spec:
        return None
    if not isinstance(spec, dict):
        logger.warning(f"Ignoring media reference that is not a mapping: {spec!r}")
        return None
    try:
        if spec.get("path"):
            media_path = Path(str(spec["path"]))
            if not media_path.is_absolute():
                media_path = base_dir / media_path
            return MediaProvider.from_path(media_path)
        if spec.get("url"):
            return MediaProvider.from_url(str(spec["url"]))
        if spec.get("base64"):
            return MediaProvider.from_base64(str(spec["base64"]))
    except ValueError as e:
        logger.warning(f"Ignoring invalid media reference {spec!r}: {e}")
        return None
    logger.warning(f"Ignoring media reference with no path, url or base64: {spec!r}")
    return None


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _populate_test(test: Test, spec: Dict[str, Any], base_dir: Path) -> None:
    test.assign_author(*_as_list(spec.get("authors")))
    test.assign_category(*_as_list(spec.get("categories")))
    for entry in spec.get("logs") or []:
        if not isinstance(entry, dict):
            logger.warning(f"Ignoring log entry that is not a mapping in test {test.id}: {entry!r}")
            continue
        media = _media_from_spec(entry.get("media"), base_dir)
        if entry.get("exception"):
            test.log_exception(RuntimeError(str(entry["exception"])), media)
            continue
        test.log(Status.parse(entry.get("status")), _text(entry.get("name")), _text(entry.get("details")), media)


def report_from_suite(
    data: Dict[str, Any],
    config: Optional[ReportConfig] = None,
    base_dir: Optional[Path] = None,
) -> VisionReport:
    """
    Build a ``VisionReport`` from a loaded suite mapping.

    Raises:
        ConfigurationError: if ``system_info`` is not a mapping or ``tests`` is not a list
    """
    system_info = data.get("system_info") or {}
    if not isinstance(system_info, dict):
        raise ConfigurationError(f"'system_info' must be a mapping, got {type(system_info).__name__}")
    tests = data.get("tests") or []
    if not isinstance(tests, list):
        raise ConfigurationError(f"'tests' must be a list, got {type(tests).__name__}")

    base_dir = base_dir or Path.cwd()
    report = VisionReport(config=config)
    settings = report.config()
    settings.set_title(_text(data.get("title")))
    for key, value in system_info.items():
        if key is None or not str(key).strip():
            logger.warning("Ignoring system info entry with an empty key")
            continue
        settings.add_custom_info(str(key), _text(value))

    for spec in tests:
        if not isinstance(spec, dict):
            logger.warning(f"Ignoring test entry that is not a mapping: {spec!r}")
            continue
        test = report.create_test(_text(spec.get("name")), _text(spec.get("id")), _text(spec.get("description")))
        _populate_test(test, spec, base_dir)
    return report
