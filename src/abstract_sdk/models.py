"""Request payload models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_body(self) -> dict[str, Any]:
        # Fields the caller never set stay out of the body.
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class NewProject(_Payload):
    """Project fields accepted by create and update."""

    name: str | None = None
    organization_id: str | None = Field(default=None, alias="organizationId")
    description: str | None = None
    color: str | None = None
    section_id: str | None = Field(default=None, alias="sectionId")
    visibility: Literal["organization", "specific"] | None = None

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        # The API reads the description from "about".
        if self.description is not None:
            body["about"] = self.description
        return body


class NewWebhook(_Payload):
    url: str
    events: list[str] = Field(default_factory=list)
    active: bool = True
    key: str | None = None
    id: str | None = None


class ShareInput(_Payload):
    kind: Literal["project", "branch", "commit", "file", "layer", "collection"]
    project_id: str | None = Field(default=None, alias="projectId")
    branch_id: str | None = Field(default=None, alias="branchId")
    file_id: str | None = Field(default=None, alias="fileId")
    layer_id: str | None = Field(default=None, alias="layerId")
    collection_id: str | None = Field(default=None, alias="collectionId")
    sha: str | None = None

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        if self.sha is not None:
            body["commitSha"] = self.sha
        return body


def payload_body(model: type[_Payload], value: _Payload | Mapping[str, Any]) -> dict[str, Any]:
    """Validate a mapping (or pass through a model) and return its JSON body."""
    if not isinstance(value, _Payload):
        try:
            value = model.model_validate(dict(value))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid {model.__name__} payload: {exc}") from exc
    return value.to_body()


__all__ = ["NewProject", "NewWebhook", "ShareInput", "payload_body"]
