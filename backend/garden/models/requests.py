"""API request models."""

from __future__ import annotations

from pydantic import Field

from garden.models.responses import CamelModel


class LinkUpdateRequest(CamelModel):
    project_link: str | None = Field(None, description="New external link; empty clears it")
