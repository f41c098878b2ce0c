"""Typed binding generator for UPnP / TR-064 device control APIs."""
from .codegen.traversal import generate, generate_document
from .errors import (
    BindgenError,
    DecodeError,
    GenerationFailed,
    MalformedServiceType,
    SchemaInconsistency,
    TransportError,
    UnmappedType,
)
from .settings import ErrorPolicy, RootDocument, Settings

__version__ = "0.1.0"

__all__ = [
    "generate",
    "generate_document",
    "BindgenError",
    "DecodeError",
    "GenerationFailed",
    "MalformedServiceType",
    "SchemaInconsistency",
    "TransportError",
    "UnmappedType",
    "ErrorPolicy",
    "RootDocument",
    "Settings",
]
