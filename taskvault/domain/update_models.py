"""Request bodies for updating records."""

from pydantic import BaseModel, ConfigDict


class ProfileUpdate(BaseModel):
    """Body of PUT /profile; both fields are re-validated in full."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    email: str = ""


class TaskUpdate(BaseModel):
    """Body of PUT /tasks/{id}."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    status: str | None = None
