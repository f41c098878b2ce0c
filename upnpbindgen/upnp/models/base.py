from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class DescriptionModel(BaseModel):
    """Immutable record decoded from an xmltodict tree.

    xmltodict yields ``None`` for empty elements (``<argumentList/>``), those
    keys are dropped so the field default applies.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_elements(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
