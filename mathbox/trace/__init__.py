"""Trace logging helpers for the parse pipeline."""

from mathbox.trace.event import new_event
from mathbox.trace.logger import TraceLogger

__all__ = ["TraceLogger", "new_event"]
