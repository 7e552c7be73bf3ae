"""Request bodies for creating records."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Body of POST /auth/register."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")
    password: str = Field(default="", description="Password, 6 or more characters")


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""

    model_config = ConfigDict(extra="ignore")

    email: str = Field(default="", description="Email address")
    password: str | None = Field(default=None, description="Password")


class TaskCreate(BaseModel):
    """Body of POST /tasks. Owner is always the caller and never read from the body."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", description="Task title")
    description: str = Field(default="", description="Task description")
    status: str | None = Field(default=None, description="pending, in-progress or completed")
