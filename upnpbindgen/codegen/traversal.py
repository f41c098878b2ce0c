from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urljoin

from ..errors import BindgenError, Diagnostic, GenerationFailed
from ..settings import ErrorPolicy, RootDocument, Settings
from ..upnp.decode import decode_root, decode_service
from ..upnp.models.root import Device, Service
from ..upnp.models.service import Action
from ..utils import Fetcher, Transport
from .emitter import Artifact, render, write_artifacts
from .synthesizer import GeneratedBindings, service_module_name, synthesize_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationContext:
    transport: Fetcher
    location_url: str
    prefix: str = ""
    policy: ErrorPolicy = ErrorPolicy.FAIL_FAST

    def fail(self, location: str, error: BindgenError) -> tuple[Diagnostic, ...]:
        """Apply the error policy: raise, or turn ``error`` into a diagnostic."""
        if self.policy is ErrorPolicy.FAIL_FAST:
            raise error
        logger.error("%s: %s", location, error)
        return (Diagnostic(location, error),)


@dataclass(frozen=True)
class GenerationResult:
    document: RootDocument
    bindings: GeneratedBindings
    artifacts: tuple[Artifact, ...] = ()


async def collect_service(service: Service, context: GenerationContext) -> GeneratedBindings:
    bindings = GeneratedBindings(prefix=context.prefix)
    try:
        # checked before fetching so nothing is composed for a bad service type
        service_module_name(service.service_type)
        url = urljoin(context.location_url, service.scpd_url)
        logger.info("fetch %s schema %s", service.service_type, url)
        description = decode_service(await context.transport.fetch(url))
    except BindgenError as exc:
        return bindings.add_diagnostics(context.fail(service.service_type, exc))

    diagnostics = []

    def on_error(action: Action, error: BindgenError):
        diagnostics.extend(context.fail(f"{service.service_type}#{action.name}", error))

    synthesized = synthesize_service(
        service,
        description,
        prefix=context.prefix,
        on_error=None if context.policy is ErrorPolicy.FAIL_FAST else on_error,
    )
    return bindings.add_service(synthesized).add_diagnostics(diagnostics)


async def collect_device(device: Device, context: GenerationContext) -> GeneratedBindings:
    """Synthesize bindings for ``device`` and all nested devices, depth first.

    Services of a device are handled before its child devices. Fetches are
    awaited one after the other.
    """
    logger.info("device %s (%s)", device.friendly_name, device.device_type)
    bindings = GeneratedBindings(prefix=context.prefix)
    for service in device.services:
        bindings = bindings.merge(await collect_service(service, context))
    for child in device.devices:
        bindings = bindings.merge(await collect_device(child, context))
    return bindings


async def generate_document(
    document: RootDocument, settings: Settings, transport: Fetcher
) -> GeneratedBindings:
    url = document.url(settings.address)
    context = GenerationContext(
        transport=transport,
        location_url=url,
        prefix=document.file_prefix,
        policy=settings.error_policy,
    )
    try:
        logger.info("fetch root description %s", url)
        root = decode_root(await transport.fetch(url))
    except BindgenError as exc:
        return GeneratedBindings(prefix=context.prefix).add_diagnostics(context.fail(url, exc))

    return await collect_device(root.device, context)


async def generate(
    settings: Settings, transport: Fetcher | None = None, write: bool = True
) -> list[GenerationResult]:
    """Generate bindings for every configured root document.

    Artifacts are rendered and written only once every document succeeded;
    on any error nothing is written.
    """
    if transport is None:
        async with Transport(verify_ssl=settings.verify_ssl) as owned:
            return await generate(settings, owned, write=write)

    results = []
    diagnostics: list[Diagnostic] = []
    for document in settings.documents:
        bindings = await generate_document(document, settings, transport)
        diagnostics.extend(bindings.diagnostics)
        results.append(GenerationResult(document=document, bindings=bindings))

    if diagnostics:
        raise GenerationFailed(tuple(diagnostics))

    results = [
        GenerationResult(
            document=result.document,
            bindings=result.bindings,
            artifacts=tuple(render(result.bindings, settings, result.document)),
        )
        for result in results
    ]
    if write:
        for result in results:
            write_artifacts(result.artifacts)
    return results
