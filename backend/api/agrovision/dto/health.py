from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthStatusResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    status: str = Field(default="ok")
    model_state: str
