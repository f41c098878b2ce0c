from __future__ import annotations

from dataclasses import dataclass


class BindgenError(Exception):
    """Base class of every error that aborts a generation run."""


class TransportError(BindgenError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


class DecodeError(BindgenError):
    def __init__(self, document: str, reason: str):
        self.document = document
        self.reason = reason
        super().__init__(f"{document} document does not match: {reason}")


class SchemaInconsistency(BindgenError):
    """An argument references a state variable missing from its service."""

    def __init__(self, argument: str, state_variable: str):
        self.argument = argument
        self.state_variable = state_variable
        super().__init__(
            f"argument {argument} references unknown state variable {state_variable}"
        )


class UnmappedType(BindgenError):
    """A state variable declares a wire type outside the fixed mapping table."""

    def __init__(self, state_variable: str, wire_type: str):
        self.state_variable = state_variable
        self.wire_type = wire_type
        super().__init__(
            f"state variable {state_variable} has unsupported data type {wire_type!r}"
        )


class MalformedServiceType(BindgenError):
    def __init__(self, service_type: str):
        self.service_type = service_type
        super().__init__(
            f"service type {service_type!r} has fewer than four colon-delimited segments"
        )


@dataclass(frozen=True)
class Diagnostic:
    location: str
    error: BindgenError

    def __str__(self):
        return f"{self.location}: {self.error}"


class GenerationFailed(BindgenError):
    def __init__(self, diagnostics: tuple[Diagnostic, ...]):
        self.diagnostics = diagnostics
        lines = "\n".join(f"  {d}" for d in diagnostics)
        super().__init__(f"{len(diagnostics)} error(s) during generation:\n{lines}")
