"""Export engine."""

from .engine import ExportEngine, ExportSummary

__all__ = ['ExportEngine', 'ExportSummary']
