"""Diagnostic records and sinks for parse failures."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel

from mathbox.core.ast import SourceRange
from mathbox.trace.event import new_event

if TYPE_CHECKING:
    from mathbox.parse.tokens import Token
    from mathbox.trace.logger import TraceLogger


class DiagnosticCode(str, Enum):
    """Diagnostic categories."""

    UNEXPECTED_TOKEN = "unexpected_token"
    AMBIGUOUS_FUNCTION_EXPONENT = "ambiguous_function_exponent"
    NESTING_TOO_DEEP = "nesting_too_deep"
    INVALID_NUMBER = "invalid_number"


class Diagnostic(BaseModel):
    """Non-fatal parse issue pointing at a region of the layout."""

    code: DiagnosticCode
    message: str
    range: SourceRange
    details: dict | None = None


class DiagnosticSink(Protocol):
    """Receiver for syntax-error reports. Return values are ignored."""

    def report_unexpected_token(self, token: "Token") -> None: ...

    def report_ambiguous_function_exponent(self, range: SourceRange) -> None: ...

    def report_nesting_too_deep(self, range: SourceRange, limit: int) -> None: ...

    def report_invalid_number(self, range: SourceRange, length: int) -> None: ...


class DiagnosticLog:
    """Collecting sink; optionally mirrors each diagnostic to a trace logger."""

    def __init__(self, trace: "TraceLogger | None" = None) -> None:
        self.diagnostics: list[Diagnostic] = []
        self._trace = trace

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)

    def codes(self) -> list[DiagnosticCode]:
        return [diagnostic.code for diagnostic in self.diagnostics]

    def report_unexpected_token(self, token: "Token") -> None:
        self._append(
            Diagnostic(
                code=DiagnosticCode.UNEXPECTED_TOKEN,
                message=f"unexpected {token.describe()}",
                range=token.range,
                details={"kind": token.kind.value, "code_point": token.code_point},
            )
        )

    def report_ambiguous_function_exponent(self, range: SourceRange) -> None:
        self._append(
            Diagnostic(
                code=DiagnosticCode.AMBIGUOUS_FUNCTION_EXPONENT,
                message="function exponentiation is ambiguous; only -1 (inverse) is allowed",
                range=range,
            )
        )

    def report_nesting_too_deep(self, range: SourceRange, limit: int) -> None:
        self._append(
            Diagnostic(
                code=DiagnosticCode.NESTING_TOO_DEEP,
                message=f"layout nesting exceeds the limit of {limit}",
                range=range,
                details={"limit": limit},
            )
        )

    def report_invalid_number(self, range: SourceRange, length: int) -> None:
        self._append(
            Diagnostic(
                code=DiagnosticCode.INVALID_NUMBER,
                message=f"number literal of {length} characters cannot be converted",
                range=range,
                details={"length": length},
            )
        )

    def _append(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self._trace is not None:
            self._trace.append(
                new_event("diagnostic", diagnostic.message, data=diagnostic.model_dump(mode="json"))
            )
