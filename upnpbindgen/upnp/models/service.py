from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, field_validator

from .base import DescriptionModel
from .root import SpecVersion


class Argument(DescriptionModel):
    name: str
    direction: str
    related_state_variable: str = Field(alias="relatedStateVariable")


class ArgumentList(DescriptionModel):
    argument: tuple[Argument, ...] = ()


class Action(DescriptionModel):
    name: str
    argument_list: ArgumentList = Field(default_factory=ArgumentList, alias="argumentList")

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return self.argument_list.argument


class ActionList(DescriptionModel):
    action: tuple[Action, ...] = ()


class AllowedValueList(DescriptionModel):
    allowed_value: tuple[str, ...] = Field((), alias="allowedValue")

    @field_validator("allowed_value", mode="before")
    @classmethod
    def _empty_values(cls, values: Any) -> Any:
        if isinstance(values, list):
            return [value or "" for value in values]
        return values


class AllowedValueRange(DescriptionModel):
    minimum: str = ""
    maximum: str = ""
    step: str = ""


class StateVariable(DescriptionModel):
    name: str
    data_type: str = Field(alias="dataType")
    default_value: str = Field("", alias="defaultValue")
    send_events: str = Field("no", alias="@sendEvents")
    allowed_value_list: AllowedValueList = Field(
        default_factory=AllowedValueList, alias="allowedValueList"
    )
    allowed_value_range: Optional[AllowedValueRange] = Field(None, alias="allowedValueRange")

    @field_validator("data_type", mode="before")
    @classmethod
    def _data_type_text(cls, value: Any) -> Any:
        # UPnP 2 allows <dataType type="...">string</dataType>
        if isinstance(value, dict):
            return value.get("#text", "")
        return value

    @property
    def allowed_values(self) -> tuple[str, ...]:
        return self.allowed_value_list.allowed_value


class ServiceStateTable(DescriptionModel):
    state_variable: tuple[StateVariable, ...] = Field((), alias="stateVariable")


class ServiceDescription(DescriptionModel):
    spec_version: SpecVersion = Field(alias="specVersion")
    action_list: ActionList = Field(default_factory=ActionList, alias="actionList")
    service_state_table: ServiceStateTable = Field(
        default_factory=ServiceStateTable, alias="serviceStateTable"
    )

    @property
    def actions(self) -> tuple[Action, ...]:
        return self.action_list.action

    @property
    def state_variables(self) -> tuple[StateVariable, ...]:
        return self.service_state_table.state_variable
