"""Shared pydantic base and small generic responses."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class OkResponse(CamelModel):
    ok: bool = True


class HealthResponse(BaseModel):
    status: str = "ok"
