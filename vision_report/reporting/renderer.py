"""
HTML rendering of a ``ReportModel`` with jinja2.
"""

import threading
from pathlib import Path
from typing import Optional, Union

import jinja2

from vision_report.core.errors import RenderError
from vision_report.reporting.models import ReportModel

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "report.html.j2"


class TemplateEngine:
    """
    Render report models through a jinja2 template.

    The jinja2 environment is built once, on first use, and reused for every
    render afterwards. Create one engine per session (or per process) and
    pass it around instead of relying on a global.

    Text fields of the model are escaped by the builder, so the environment
    does not autoescape; the template escapes the remaining raw fields
    (title, system info, test names) explicitly.
    """

    def __init__(self, template_dir: Optional[Union[str, Path]] = None,
                 template_name: str = DEFAULT_TEMPLATE):
        self.template_dir = Path(template_dir) if template_dir else TEMPLATES_DIR
        self.template_name = template_name or DEFAULT_TEMPLATE
        self._environment: Optional[jinja2.Environment] = None
        self._lock = threading.Lock()

    @property
    def environment(self) -> jinja2.Environment:
        if self._environment is None:
            with self._lock:
                if self._environment is None:
                    self._environment = jinja2.Environment(
                        loader=jinja2.FileSystemLoader(str(self.template_dir)),
                        trim_blocks=True,
                        lstrip_blocks=True,
                        autoescape=False,
                        undefined=jinja2.StrictUndefined,
                    )
        return self._environment

    def render(self, model: ReportModel, template_name: Optional[str] = None) -> str:
        """
        Render ``model`` to a complete HTML document.

        Raises:
            ValueError: if ``model`` is None
            RenderError: if the template cannot be loaded or fails to render
        """
        if model is None:
            raise ValueError("ReportModel cannot be None")
        name = template_name or self.template_name
        try:
            template = self.environment.get_template(name)
            return template.render(report=model.to_dict())
        except jinja2.TemplateError as e:
            raise RenderError(f"Failed to render template {name!r}: {e}") from e
