"""
Entry point for running vision_report as a module.

Usage:
    python -m vision_report [command] [options]
"""

from vision_report.cli import main

if __name__ == "__main__":
    main()
