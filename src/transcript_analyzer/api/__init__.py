"""HTTP API exposing the analysis workflow, model catalog and key validation.

Build the application with :func:`create_app`; the gateway and settings are
stored on ``app.state`` so routes (and tests) share one instance.
"""

from transcript_analyzer.api.app import create_app

__all__ = ["create_app"]
