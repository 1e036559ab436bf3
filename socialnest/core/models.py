from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CurrentUser(BaseModel):
    """Acting account resolved from the request credential."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    email: str
    name: str
