"""
Domain package for pg-porter.

Exports the result record shared by the orchestrator, reporter, and CLI.
"""

from pg_porter.domain.models import ExportResult

__all__ = [
    "ExportResult",
]
