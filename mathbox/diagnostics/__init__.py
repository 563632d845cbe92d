"""Diagnostics emitted while parsing layouts."""

from mathbox.diagnostics.models import Diagnostic, DiagnosticCode, DiagnosticLog, DiagnosticSink

__all__ = ["Diagnostic", "DiagnosticCode", "DiagnosticLog", "DiagnosticSink"]
