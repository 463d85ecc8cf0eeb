"""
Custom exceptions for Vision Report.
"""


class VisionReportError(Exception):
    """Base exception for all Vision Report errors."""
    pass


class ConfigurationError(VisionReportError):
    """Raised when configuration is invalid or cannot be read."""
    pass


class MediaResolutionError(VisionReportError):
    """Raised when a media reference cannot be turned into an embeddable payload."""
    pass


class RenderError(VisionReportError):
    """Raised when the HTML template fails to load or render."""
    pass


class ReportWriteError(VisionReportError):
    """Raised when the rendered report cannot be written to disk."""
    pass
