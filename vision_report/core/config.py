"""
Configuration management for Vision Report.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from vision_report.core.errors import ConfigurationError

CONFIG_ENV_VAR = "VISION_REPORT_CONFIG"
DEFAULT_CONFIG_FILE = "vision_report.toml"
DEFAULT_OUTPUT_DIR = "vision-reports"
DEFAULT_TITLE = "Automation Test Report"

PATH_KEYS = frozenset({"config_file", "template_dir"})

# Expected TOML value types for keys read from the config file.
FILE_VALUE_TYPES = {
    "output_dir": str,
    "filename_prefix": str,
    "default_title": str,
    "template_dir": str,
    "template_name": str,
    "default_mime_type": str,
    "verbosity": int,
}


@dataclass
class ReportConfig:
    """Configuration class for Vision Report sessions."""

    # Output
    output_dir: str = DEFAULT_OUTPUT_DIR
    filename_prefix: str = "VR"
    default_title: str = DEFAULT_TITLE

    # Rendering
    template_dir: Optional[Path] = None
    template_name: str = "report.html.j2"

    # Media
    default_mime_type: str = "image/png"

    # Diagnostics
    verbosity: int = 1  # 0=warnings only, 1=outcome, 2=progress, 3=debug

    config_file: Optional[Path] = None
    load_config_file: bool = True

    def __post_init__(self):
        """Post-initialization processing."""
        if self.load_config_file:
            self._load_config_file()

        if self.template_dir is not None:
            self.template_dir = Path(self.template_dir).resolve()

        if not self.output_dir or not str(self.output_dir).strip():
            self.output_dir = DEFAULT_OUTPUT_DIR

        if not self.default_title or not self.default_title.strip():
            self.default_title = DEFAULT_TITLE

        if not isinstance(self.verbosity, int) or not 0 <= self.verbosity <= 3:
            raise ValueError(f"verbosity must be between 0 and 3, got {self.verbosity}")

    def _load_config_file(self) -> None:
        """Load defaults from vision_report.toml if present."""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            self.config_file = Path(env_path).resolve()
        elif self.config_file is None:
            self.config_file = Path.cwd() / DEFAULT_CONFIG_FILE
        else:
            self.config_file = Path(self.config_file)

        if not self.config_file or not self.config_file.exists():
            return

        try:
            try:
                import tomllib  # Python 3.11+
            except ModuleNotFoundError:  # Python 3.8-3.10
                import tomli as tomllib

            data = tomllib.loads(self.config_file.read_text(encoding="utf-8"))
            table = data.get("vision_report") or data.get("tool", {}).get("vision_report", {})
            if not isinstance(table, dict):
                return
        except Exception as e:
            raise ConfigurationError(f"Failed to read config file: {self.config_file}: {e}") from e

        for key, value in table.items():
            expected = FILE_VALUE_TYPES.get(key)
            if expected is None or value is None:
                continue
            if not isinstance(value, expected) or isinstance(value, bool):
                raise ConfigurationError(
                    f"Invalid value for '{key}' in {self.config_file}: "
                    f"expected {expected.__name__}, got {type(value).__name__}"
                )
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "output_dir": self.output_dir,
            "filename_prefix": self.filename_prefix,
            "default_title": self.default_title,
            "template_dir": str(self.template_dir) if self.template_dir else None,
            "template_name": self.template_name,
            "default_mime_type": self.default_mime_type,
            "verbosity": self.verbosity,
            "config_file": str(self.config_file) if self.config_file else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportConfig":
        """Create configuration from dictionary."""
        data = dict(data)
        for key in PATH_KEYS:
            if key in data and isinstance(data[key], str):
                data[key] = Path(data[key])
        return cls(**data)
