"""Render synthesized bindings as Python modules and write them to disk.

Per root document two packages are produced: ``<prefix>_responses`` with one
dataclass module per service plus the shared envelope module, and
``<prefix>_requests`` with one module of request functions per service. Each
package's ``__init__`` is the sorted module index.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from ..settings import RootDocument, Settings
from .synthesizer import (
    IDENTIFIER_PARAMETER,
    GeneratedBindings,
    RequestFunctionDescriptor,
    ResponseTypeDescriptor,
    ServiceBindings,
)
from .types import Primitive

logger = logging.getLogger(__name__)

HEADER = "# Generated by upnpbindgen from {source}. Do not edit.\n"

ENVELOPE_BODY = '''
T = TypeVar("T")


class UnknownResponse(LookupError):
    pass


@dataclass
class Body(Generic[T]):
    response: T


@dataclass
class Envelope(Generic[T]):
    body: Body[T]


def _convert(value: Any, type_: type) -> Any:
    if isinstance(value, dict):
        value = value.get("#text")
    if value is None:
        value = ""
    if type_ is bool:
        return value.strip().lower() in ("1", "true", "yes")
    if type_ is int:
        return int(value) if value.strip() else 0
    return value


def _build(response_type: type, data: Any) -> Any:
    data = data if isinstance(data, dict) else {}
    values = {
        f.name: _convert(data.get(f.metadata["tag"]), f.metadata["type"])
        for f in fields(response_type)
    }
    return response_type(**values)


def _lookup(service_type: str, discriminant: str) -> type | None:
    response_type = RESPONSE_TYPES.get((service_type, discriminant))
    if response_type is not None:
        return response_type
    candidates = [t for (_, d), t in RESPONSE_TYPES.items() if d == discriminant]
    return candidates[0] if len(candidates) == 1 else None


def decode_envelope(xml: str | bytes) -> Envelope[Any]:
    """Decode a SOAP response into the matching response dataclass."""
    tree = xmltodict.parse(
        xml,
        process_namespaces=True,
        namespaces={"http://schemas.xmlsoap.org/soap/envelope/": None},
    )
    body = tree["Envelope"]["Body"] or {}
    for key, value in body.items():
        service_type, _, discriminant = key.rpartition(":")
        response_type = _lookup(service_type, discriminant)
        if response_type is not None:
            return Envelope(body=Body(response=_build(response_type, value)))
    raise UnknownResponse(f"no registered response in {list(body)}")
'''


@dataclass(frozen=True)
class Artifact:
    path: Path
    content: str


def _quote(text: str) -> str:
    return json.dumps(text)


def _field_type(primitive: Primitive) -> str:
    return primitive.python_type


def render_response_class(response: ResponseTypeDescriptor) -> list[str]:
    lines = ["@dataclass", f"class {response.class_name}:"]
    if not response.fields:
        lines.append("    pass")
    for f in response.fields:
        type_name = _field_type(f.type)
        lines.append(
            f"    {f.name}: {type_name} = field("
            f'metadata={{"tag": {_quote(f.tag)}, "type": {type_name}}})'
        )
    return lines


def render_response_module(service: ServiceBindings, source: str) -> str:
    lines = [
        HEADER.format(source=source),
        f'"""Response bindings for {service.service_type}."""',
        "from dataclasses import dataclass, field",
        "",
        f"SERVICE_TYPE = {_quote(service.service_type)}",
    ]
    for response in service.responses:
        lines += ["", ""] + render_response_class(response)
    return "\n".join(lines) + "\n"


def _body_argument(parameter) -> str:
    if parameter.by_reference:
        return f"escape({parameter.name})"
    if parameter.type is Primitive.BOOLEAN:
        return f"int({parameter.name})"
    return parameter.name


def render_request_function(request: RequestFunctionDescriptor) -> list[str]:
    signature = [f"{p.name}: {_field_type(p.type)}" for p in request.parameters]
    signature.append(f"{IDENTIFIER_PARAMETER}: str = {_quote(request.identifier_default)}")
    body_arguments = [IDENTIFIER_PARAMETER] + [_body_argument(p) for p in request.parameters]
    return [
        f"def {request.function_name}({', '.join(signature)}) -> tuple[str, str, str]:",
        f'    """Build the {request.action_name} request: (uri, soap action, body)."""',
        f"    uri = {_quote(request.control_url)}",
        f"    header = {_quote(request.action_reference_template)}.format({IDENTIFIER_PARAMETER})",
        f"    body = {_quote(request.payload_template)}.format({', '.join(body_arguments)})",
        "    return uri, header, body",
    ]


def render_request_module(service: ServiceBindings, source: str) -> str:
    lines = [
        HEADER.format(source=source),
        f'"""Request bindings for {service.service_type}."""',
    ]
    if any(p.by_reference for r in service.requests for p in r.parameters):
        lines.append("from xml.sax.saxutils import escape")
        lines.append("")
    lines.append(f"SERVICE_TYPE = {_quote(service.service_type)}")
    for request in service.requests:
        lines += ["", ""] + render_request_function(request)
    return "\n".join(lines) + "\n"


def render_envelope_module(bindings: GeneratedBindings, source: str) -> str:
    registry = bindings.envelope
    lines = [
        HEADER.format(source=source),
        '"""Shared SOAP envelope accepting every registered response."""',
        "from __future__ import annotations",
        "",
        "from dataclasses import dataclass, fields",
        "from typing import Any, Generic, TypeVar",
        "",
        "import xmltodict",
        "",
    ]
    for module in registry.modules():
        lines.append(f"from . import {module}")
    lines += ["", "RESPONSE_TYPES = {"]
    for entry in registry.entries:
        lines.append(
            f"    ({_quote(entry.service_type)}, {_quote(entry.discriminant)}): "
            f"{entry.module_name}.{entry.class_name},"
        )
    lines.append("}")
    return "\n".join(lines) + "\n" + ENVELOPE_BODY


def render_index(modules: list[str], source: str) -> str:
    lines = [HEADER.format(source=source)]
    lines += [f"from . import {module}" for module in modules]
    return "\n".join(lines) + "\n"


def render(bindings: GeneratedBindings, settings: Settings, document: RootDocument) -> list[Artifact]:
    source = document.path
    responses = settings.responses_path(document)
    requests = settings.requests_path(document)

    artifacts = [
        Artifact(responses / "__init__.py", render_index(bindings.response_index(), source)),
        Artifact(
            responses / f"{bindings.envelope_module}.py",
            render_envelope_module(bindings, source),
        ),
    ]
    for service in bindings.services:
        artifacts.append(
            Artifact(
                responses / f"{service.module_name}.py",
                render_response_module(service, source),
            )
        )

    artifacts.append(
        Artifact(requests / "__init__.py", render_index(bindings.request_index(), source))
    )
    for service in bindings.services:
        artifacts.append(
            Artifact(
                requests / f"{service.module_name}.py",
                render_request_module(service, source),
            )
        )
    return artifacts


def ensure_directory(path: Path):
    path.mkdir(parents=True, exist_ok=True)


def write_file(path: Path, content: str):
    path.write_text(content, encoding="utf-8")


def write_artifacts(artifacts):
    for artifact in artifacts:
        ensure_directory(artifact.path.parent)
        write_file(artifact.path, artifact.content)
        logger.info("wrote %s", artifact.path)
