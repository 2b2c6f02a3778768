from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Body of /summary and /quiz; note and options are validated by the service, not here."""

    model_config = ConfigDict(extra="allow")

    note: Any = Field(default=None, description="Note object: {id?: str, text: str}.")
    options: Any = Field(default=None, description="Optional generation options.")


class CreateGroupRequest(BaseModel):
    groupName: str | None = Field(default=None, description="Display name; unique case-insensitively.")
    about: str | None = None
