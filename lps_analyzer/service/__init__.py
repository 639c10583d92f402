"""HTTP surface around :func:`lps_analyzer.run_comparison`."""

from .app import ServiceSettings, create_app

__all__ = ["ServiceSettings", "create_app"]
