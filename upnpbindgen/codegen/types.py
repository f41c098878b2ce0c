from __future__ import annotations

from enum import Enum
from typing import Iterable

from ..errors import SchemaInconsistency, UnmappedType
from ..upnp.models.service import StateVariable


class Primitive(Enum):
    BOOLEAN = "bool"
    UINT32 = "u32"
    INT32 = "i32"
    TEXT = "str"

    @property
    def python_type(self) -> str:
        if self is Primitive.BOOLEAN:
            return "bool"
        if self is Primitive.TEXT:
            return "str"
        return "int"


WIRE_TYPES: dict[str, Primitive] = {
    "boolean": Primitive.BOOLEAN,
    "ui1": Primitive.UINT32,
    "ui2": Primitive.UINT32,
    "ui4": Primitive.UINT32,
    "i1": Primitive.INT32,
    "i2": Primitive.INT32,
    "i4": Primitive.INT32,
    "string": Primitive.TEXT,
    "uuid": Primitive.TEXT,
    "dateTime": Primitive.TEXT,
}


def find_state_variable(
    name: str, state_variables: Iterable[StateVariable]
) -> StateVariable | None:
    for variable in state_variables:
        if variable.name == name:
            return variable
    return None


def resolve(
    argument: str, reference: str, state_variables: Iterable[StateVariable]
) -> Primitive:
    """Resolve the primitive type of ``argument`` through its state variable.

    Only the state table of the argument's own service may be passed in.
    """
    variable = find_state_variable(reference, state_variables)
    if variable is None:
        raise SchemaInconsistency(argument, reference)

    try:
        return WIRE_TYPES[variable.data_type]
    except KeyError:
        raise UnmappedType(variable.name, variable.data_type) from None
