"""Pydantic models for W3C WebDriver responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# W3C web element identifier key
ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"


class Response(BaseModel):
    """Envelope of every WebDriver response."""

    value: Any = None


class NewSession(BaseModel):
    """Value of a new session response."""

    session_id: str = Field(alias="sessionId")
    capabilities: dict[str, Any] = Field(default_factory=dict)


class NewSessionResponse(BaseModel):
    """Response from the new session command."""

    value: NewSession


class ElementReference(BaseModel):
    """Web element reference returned by find element."""

    model_config = ConfigDict(populate_by_name=True)

    element_id: str = Field(alias=ELEMENT_KEY)


class ElementResponse(BaseModel):
    """Response from the find element command."""

    value: ElementReference


class ErrorValue(BaseModel):
    """Error details carried in a failed response."""

    error: str
    message: str = ""
    stacktrace: str = ""


class ErrorResponse(BaseModel):
    """Response of a failed command."""

    value: ErrorValue
