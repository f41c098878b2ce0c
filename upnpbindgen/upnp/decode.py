from __future__ import annotations

import logging
from typing import TypeVar
from xml.parsers.expat import ExpatError

from pydantic import ValidationError

from ..errors import DecodeError
from ..utils import strip_default_namespace, xml2dict
from .models.base import DescriptionModel
from .models.root import RootDescription
from .models.service import ServiceDescription

logger = logging.getLogger(__name__)

# container element -> repeated child element
LIST_ELEMENTS = {
    "iconList": "icon",
    "serviceList": "service",
    "deviceList": "device",
    "actionList": "action",
    "argumentList": "argument",
    "serviceStateTable": "stateVariable",
    "allowedValueList": "allowedValue",
}

Model = TypeVar("Model", bound=DescriptionModel)


def force_list(path, key, value) -> bool:
    return bool(path) and LIST_ELEMENTS.get(path[-1][0]) == key


def decode(xml: str | bytes, root_element: str, shape: type[Model]) -> Model:
    """Decode a description document into ``shape``.

    ``root_element`` is the document element holding the record (``root`` for
    device descriptions, ``scpd`` for service descriptions).
    """
    if not isinstance(xml, str):
        xml = xml.decode()

    try:
        tree = xml2dict(strip_default_namespace(xml), force_list=force_list)
    except ExpatError as exc:
        raise DecodeError(root_element, f"malformed xml: {exc}") from exc

    if not isinstance(tree, dict) or not isinstance(tree.get(root_element), dict):
        raise DecodeError(root_element, f"missing <{root_element}> document element")

    try:
        return shape.model_validate(tree[root_element])
    except ValidationError as exc:
        raise DecodeError(root_element, str(exc)) from exc


def decode_root(xml: str | bytes) -> RootDescription:
    return decode(xml, "root", RootDescription)


def decode_service(xml: str | bytes) -> ServiceDescription:
    return decode(xml, "scpd", ServiceDescription)
