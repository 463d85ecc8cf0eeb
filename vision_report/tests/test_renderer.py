from pathlib import Path

import pytest

from vision_report.api.media import MediaProvider
from vision_report.api.status import Status
from vision_report.core.errors import RenderError
from vision_report.reporting.builder import ReportModelBuilder
from vision_report.reporting.models import MediaModel
from vision_report.reporting.results import Result
from vision_report.reporting.renderer import TemplateEngine
from vision_report.report import VisionReport


def _model(png_base64: str):
    report = VisionReport()
    report.config().set_title("Title <b>").add_custom_info("Build", "1 & 2")
    report.create_test("Login <form>") \
        .assign_category("Smoke") \
        .log(Status.PASS, "<script>alert(1)</script>", "details", MediaProvider.from_base64(png_base64)) \
        .log(Status.FAIL, "broken")
    report.create_test("Skipped").log(Status.SKIP, "later")
    return ReportModelBuilder().build(report)


def test_render_produces_self_contained_html(png_base64):
    html = TemplateEngine().render(_model(png_base64))
    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert f"data:image/png;base64,{png_base64}" in html
    assert "<link" not in html
    assert "src=\"http" not in html
    assert "conic-gradient(" in html


def test_render_escapes_raw_and_preescaped_fields(png_base64):
    html = TemplateEngine().render(_model(png_base64))
    assert "<title>Title &lt;b&gt;</title>" in html
    assert "1 &amp; 2" in html
    assert "Login &lt;form&gt;" in html
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


def test_render_empty_report():
    html = TemplateEngine().render(ReportModelBuilder().build(VisionReport()))
    assert "No tests recorded." in html
    assert "No tags assigned." in html


def test_render_none_model_raises():
    with pytest.raises(ValueError):
        TemplateEngine().render(None)


def test_missing_template_raises_render_error(tmp_path: Path):
    engine = TemplateEngine(template_dir=tmp_path)
    with pytest.raises(RenderError):
        engine.render(ReportModelBuilder().build(VisionReport()))


def test_custom_template_dir(tmp_path: Path):
    (tmp_path / "mini.html.j2").write_text("{{ report.title }}|{{ report.total_tests }}")
    engine = TemplateEngine(template_dir=tmp_path, template_name="mini.html.j2")
    assert engine.render(ReportModelBuilder().build(VisionReport())) == "Automation Test Report|0"


def test_environment_is_built_once():
    engine = TemplateEngine()
    assert engine.environment is engine.environment


def test_render_does_not_emit_markup_from_media_payload():
    report = VisionReport()
    report.create_test("t").log(
        Status.PASS, "shot", media=MediaProvider.from_base64('data:image/png;base64,AAAA" onerror="alert(1)'),
    )
    html = TemplateEngine().render(ReportModelBuilder().build(report))
    assert 'onerror="alert(1)"' not in html
    assert "data:image/png;base64,AAAA" not in html


class _RawPayloadResolver:
    def resolve_with_diagnostic(self, provider):
        return Result.success(MediaModel('x" onerror="y', "shot"))


def test_render_escapes_media_payload_attribute(png_base64):
    report = VisionReport()
    report.create_test("t").log(Status.PASS, "shot", media=MediaProvider.from_base64(png_base64))
    html = TemplateEngine().render(ReportModelBuilder(media_resolver=_RawPayloadResolver()).build(report))
    assert 'src="x&#34; onerror=&#34;y"' in html
