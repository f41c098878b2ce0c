from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional

from ..errors import BindgenError, Diagnostic, MalformedServiceType
from ..upnp.models.root import Service
from ..upnp.models.service import Action, ServiceDescription, StateVariable
from .naming import class_name, normalize
from .types import Primitive, resolve

logger = logging.getLogger(__name__)

IDENTIFIER_PARAMETER = "identifier"
DEFAULT_IDENTIFIER = "1"
ENVELOPE_MODULE = "multi_use"

# names a generated request function binds or calls itself
RESERVED_PARAMETERS = frozenset({IDENTIFIER_PARAMETER, "uri", "header", "body", "escape", "int"})
# names a generated response class body looks up after its fields are bound
RESERVED_FIELDS = frozenset({"dataclass", "field", "bool", "int", "str"})

PAYLOAD_FMT = (
    '<?xml version="1.0" encoding="utf-8"?><s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/" '
    's:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/"><s:Body><u:{action} xmlns:u="{urn}">'
    "{fields}</u:{action}></s:Body></s:Envelope>"
)


def _literal(text: str) -> str:
    """Escape ``text`` for use inside a str.format template."""
    return text.replace("{", "{{").replace("}", "}}")


def unique_name(name: str, taken: set[str], reserved: frozenset[str] = frozenset()) -> str:
    """Return ``name`` made distinct from ``taken`` and ``reserved``, and record it.

    A reserved name gets a trailing ``_``; a name already taken gets ``_2``,
    ``_3``, ... appended.
    """
    if name in reserved:
        name = f"{name}_"
    candidate = name
    count = 2
    while candidate in taken or candidate in reserved:
        candidate = f"{name}_{count}"
        count += 1
    taken.add(candidate)
    return candidate


def split_service_type(service_type: str) -> tuple[str, str, str, str]:
    """Return the four defining segments of a service type.

    ``urn:schemas-upnp-org:service:WANIPConnection:1`` gives
    ``("urn", "schemas-upnp-org", "service", "WANIPConnection")``, the
    trailing version is dropped.
    """
    segments = service_type.split(":")
    if len(segments) < 4:
        raise MalformedServiceType(service_type)
    return segments[0], segments[1], segments[2], segments[3]


def service_module_name(service_type: str, prefix: str = "") -> str:
    return f"{prefix}{normalize(split_service_type(service_type)[3])}"


@dataclass(frozen=True)
class ResponseField:
    name: str
    tag: str
    type: Primitive


@dataclass(frozen=True)
class ResponseTypeDescriptor:
    class_name: str
    discriminant: str
    action_name: str
    service_type: str
    fields: tuple[ResponseField, ...] = ()

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(f.tag for f in self.fields)


@dataclass(frozen=True)
class RequestParameter:
    name: str
    tag: str
    type: Primitive

    @property
    def by_reference(self) -> bool:
        return self.type is Primitive.TEXT


@dataclass(frozen=True)
class RequestFunctionDescriptor:
    function_name: str
    action_name: str
    control_url: str
    service_type: str
    urn_segments: tuple[str, str, str, str]
    parameters: tuple[RequestParameter, ...] = ()
    identifier_default: str = DEFAULT_IDENTIFIER

    @property
    def urn_template(self) -> str:
        return _literal(":".join(self.urn_segments)) + ":{}"

    @property
    def action_reference_template(self) -> str:
        """``urn:...:Segment:{}#Action``, formatted with the identifier."""
        return f"{self.urn_template}#{_literal(self.action_name)}"

    @property
    def payload_template(self) -> str:
        """SOAP body, formatted with the identifier then each parameter."""
        fields = "".join(
            "<{tag}>{{}}</{tag}>".format(tag=_literal(p.tag)) for p in self.parameters
        )
        return PAYLOAD_FMT.format(
            action=_literal(self.action_name), urn=self.urn_template, fields=fields
        )

    def action_reference(self, identifier: str | None = None) -> str:
        return self.action_reference_template.format(identifier or self.identifier_default)

    def payload(self, *values, identifier: str | None = None) -> str:
        if len(values) != len(self.parameters):
            raise TypeError(
                f"{self.function_name} takes {len(self.parameters)} values, got {len(values)}"
            )
        return self.payload_template.format(identifier or self.identifier_default, *values)


@dataclass(frozen=True)
class ActionBinding:
    response: ResponseTypeDescriptor
    request: RequestFunctionDescriptor


@dataclass(frozen=True)
class ServiceBindings:
    module_name: str
    service_type: str
    actions: tuple[ActionBinding, ...] = ()

    @property
    def responses(self) -> tuple[ResponseTypeDescriptor, ...]:
        return tuple(a.response for a in self.actions)

    @property
    def requests(self) -> tuple[RequestFunctionDescriptor, ...]:
        return tuple(a.request for a in self.actions)


@dataclass(frozen=True)
class EnvelopeEntry:
    discriminant: str
    class_name: str
    module_name: str
    service_type: str

    @property
    def key(self) -> tuple[str, str]:
        return self.service_type, self.discriminant


@dataclass(frozen=True)
class EnvelopeRegistry:
    """Every response shape the shared envelope accepts, in registration order."""

    entries: tuple[EnvelopeEntry, ...] = ()

    def register(self, response: ResponseTypeDescriptor, module_name: str) -> EnvelopeRegistry:
        entry = EnvelopeEntry(
            discriminant=response.discriminant,
            class_name=response.class_name,
            module_name=module_name,
            service_type=response.service_type,
        )
        entries = [e for e in self.entries if e.key != entry.key]
        if len(entries) == len(self.entries):
            entries.append(entry)
        else:
            entries = [entry if e.key == entry.key else e for e in self.entries]
        return EnvelopeRegistry(tuple(entries))

    @property
    def discriminants(self) -> list[str]:
        return [e.discriminant for e in self.entries]

    def modules(self) -> list[str]:
        return sorted({e.module_name for e in self.entries})


@dataclass(frozen=True)
class GeneratedBindings:
    """Output aggregate of one root document."""

    prefix: str = ""
    services: tuple[ServiceBindings, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = field(default=(), compare=False)

    @property
    def envelope_module(self) -> str:
        return f"{self.prefix}{ENVELOPE_MODULE}"

    @property
    def envelope(self) -> EnvelopeRegistry:
        registry = EnvelopeRegistry()
        for service in self.services:
            for response in service.responses:
                registry = registry.register(response, service.module_name)
        return registry

    def add_service(self, service: ServiceBindings) -> GeneratedBindings:
        services = {s.module_name: s for s in self.services}
        previous = services.get(service.module_name)
        if previous is not None:
            logger.info(
                "%s (%s) replaces bindings of %s",
                service.module_name,
                service.service_type,
                previous.service_type,
            )
        services[service.module_name] = service
        return replace(self, services=tuple(services.values()))

    def add_diagnostics(self, diagnostics: Iterable[Diagnostic]) -> GeneratedBindings:
        return replace(self, diagnostics=self.diagnostics + tuple(diagnostics))

    def merge(self, other: GeneratedBindings) -> GeneratedBindings:
        merged = self
        for service in other.services:
            merged = merged.add_service(service)
        return merged.add_diagnostics(other.diagnostics)

    def response_index(self) -> list[str]:
        return sorted({self.envelope_module, *(s.module_name for s in self.services)})

    def request_index(self) -> list[str]:
        return sorted({s.module_name for s in self.services})


def synthesize_action(
    action: Action, service: Service, state_variables: Iterable[StateVariable]
) -> ActionBinding:
    segments = split_service_type(service.service_type)
    state_variables = tuple(state_variables)

    fields = []
    parameters = []
    field_names: set[str] = set()
    parameter_names: set[str] = set()
    for argument in action.arguments:
        if argument.direction == "out":
            name = unique_name(normalize(argument.name), field_names, RESERVED_FIELDS)
            fields.append(
                ResponseField(
                    name=name,
                    tag=argument.name,
                    type=resolve(argument.name, argument.related_state_variable, state_variables),
                )
            )
        elif argument.direction == "in":
            name = unique_name(normalize(argument.name), parameter_names, RESERVED_PARAMETERS)
            parameters.append(
                RequestParameter(
                    name=name,
                    tag=argument.name,
                    type=resolve(argument.name, argument.related_state_variable, state_variables),
                )
            )
        else:
            logger.warning(
                "%s: argument %s has unknown direction %r, skipped",
                action.name,
                argument.name,
                argument.direction,
            )
            continue

        if name != normalize(argument.name):
            logger.info("%s: argument %s bound as %s", action.name, argument.name, name)

    response = ResponseTypeDescriptor(
        class_name=f"{class_name(action.name)}Response",
        discriminant=f"{action.name}Response",
        action_name=action.name,
        service_type=service.service_type,
        fields=tuple(fields),
    )
    request = RequestFunctionDescriptor(
        function_name=f"generate_{normalize(action.name)}_request",
        action_name=action.name,
        control_url=service.control_url,
        service_type=service.service_type,
        urn_segments=segments,
        parameters=tuple(parameters),
    )
    logger.debug(
        "%s#%s: %d in, %d out", service.service_type, action.name, len(parameters), len(fields)
    )
    return ActionBinding(response=response, request=request)


def synthesize_service(
    service: Service,
    description: ServiceDescription,
    prefix: str = "",
    on_error: Optional[Callable[[Action, BindgenError], None]] = None,
) -> ServiceBindings:
    """Synthesize bindings for every action of ``service`` in source order.

    Errors raise unless ``on_error`` is given, in which case the failing
    action is reported there and left out.
    """
    module_name = service_module_name(service.service_type, prefix)

    actions = []
    function_names: set[str] = set()
    class_names: set[str] = set()
    for action in description.actions:
        try:
            binding = synthesize_action(action, service, description.state_variables)
        except BindgenError as exc:
            if on_error is None:
                raise
            on_error(action, exc)
            continue

        # actions whose names normalize alike still get distinct bindings
        response = binding.response
        request = binding.request
        actions.append(
            ActionBinding(
                response=replace(
                    response, class_name=unique_name(response.class_name, class_names)
                ),
                request=replace(
                    request, function_name=unique_name(request.function_name, function_names)
                ),
            )
        )

    return ServiceBindings(
        module_name=module_name, service_type=service.service_type, actions=tuple(actions)
    )
