"""
Command-line interface for Vision Report.

This module provides a subcommand-based CLI using Typer.
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from vision_report.api.media import MediaProvider
from vision_report.api.status import Status
from vision_report.core.config import ReportConfig
from vision_report.core.errors import VisionReportError
from vision_report.core.logging import setup_logger
from vision_report.report import VisionReport
from vision_report.suite import load_suite, report_from_suite

# 1x1 transparent PNG used by the demo report.
DEMO_IMAGE_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

app = typer.Typer(
    name="vision-report",
    help="Vision Report - generate self-contained HTML test reports",
    add_completion=False,
)


def get_config(verbosity: Optional[int] = None, output_dir: Optional[str] = None) -> ReportConfig:
    """Create and configure ReportConfig object, exiting with code 1 on a bad config file."""
    try:
        config = ReportConfig()
    except (VisionReportError, ValueError) as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(1)
    if verbosity is not None:
        if not 0 <= verbosity <= 3:
            raise typer.BadParameter(f"verbosity must be between 0 and 3, got {verbosity}")
        config.verbosity = verbosity
    if output_dir:
        config.output_dir = output_dir
    setup_logger(verbosity=config.verbosity)
    return config


def flush_exit(report: VisionReport, output: Optional[Path]) -> None:
    """Flush the report, echo the outcome, and exit with appropriate code."""
    written = report.flush(str(output) if output else None)
    if written is None:
        typer.echo("✗ No report was produced", err=True)
        sys.exit(1)
    typer.echo(f"✓ Report written to {written}")
    sys.exit(0)


def build_demo_report(report: VisionReport) -> VisionReport:
    """Populate ``report`` with a showcase of every feature."""
    report.config() \
        .set_title("Vision Report Demo - Feature Showcase") \
        .set_project_name("Vision Report Library") \
        .set_application_name("E-Commerce Test Suite") \
        .set_environment("Production") \
        .set_tester_name("QA Automation Team") \
        .add_custom_info("Build Number", "1.0.0")

    report.create_test("User Login - Successful Authentication") \
        .description("Validates that users can log in with valid credentials") \
        .assign_author("QA Team") \
        .assign_category("Smoke", "Authentication", "Critical Path") \
        .log(Status.INFO, "Navigate to login page", "Opening https://example.com/login") \
        .log(Status.PASS, "Enter credentials", "Username: testuser@example.com") \
        .log(Status.PASS, "Verify dashboard loaded", "User redirected to dashboard",
             MediaProvider.from_base64(DEMO_IMAGE_BASE64))

    report.create_test("Login - Invalid Credentials") \
        .description("Validates error handling for invalid login attempts") \
        .assign_category("Negative Testing", "Authentication") \
        .log(Status.PASS, "Enter invalid username", "Username: invalid@example.com") \
        .log(Status.FAIL, "Verify error message", "Expected 'Invalid credentials' but got 'Server Error'")

    report.create_test("Mobile App Payment") \
        .description("Skipped due to device unavailability") \
        .assign_category("Mobile", "Payment") \
        .log(Status.INFO, "Check device availability", "Looking for iOS device") \
        .log(Status.SKIP, "Device not found", "No iOS devices available in test lab")

    test = report.create_test("Exception Handling - Division") \
        .assign_category("Exception Handling", "Edge Cases") \
        .log(Status.INFO, "Initialize test data")
    try:
        1 / 0
    except ZeroDivisionError as e:
        test.log_exception(e)

    report.create_test("Escaping <Special> & \"Quoted\" Characters") \
        .assign_category("Edge Cases") \
        .log(Status.PASS, "Log<>\"'&", "Details with & < > ' \" and unicode 🚀")
    return report


@app.command()
def render(
    suite: Path = typer.Argument(..., help="YAML or JSON suite description"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output .html file or directory"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Render a report from a suite description file."""
    config = get_config(verbosity=verbosity)
    try:
        report = report_from_suite(load_suite(suite), config=config, base_dir=suite.resolve().parent)
    except VisionReportError as e:
        typer.echo(f"✗ {e}", err=True)
        sys.exit(1)
    flush_exit(report, output)


@app.command()
def demo(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output .html file or directory"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
):
    """Generate a demo report showing every feature."""
    config = get_config(verbosity=verbosity)
    report = build_demo_report(VisionReport(config=config))
    flush_exit(report, output)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
