"""
Pydantic models for capsule payloads.

Capsules travel over the wire with camelCase keys (``openDate``,
``createdAt``) because that is the shape of the stored JSON document.
The models expose snake_case attributes and map them with aliases;
FastAPI serialises responses by alias, so clients only ever see the
wire names.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field


class CapsuleCreate(BaseModel):
    """Schema for creating a capsule.

    Every field is optional here so that a request with missing
    fields reaches ``CapsuleService`` and is rejected with a 400 and
    a readable message instead of a schema error.
    """

    title: Optional[str] = Field(None, examples=["Letter"])
    message: Optional[str] = Field(None, examples=["Hi future me"])
    open_date: Optional[str] = Field(None, alias="openDate", examples=["2030-01-01"])

    model_config = {"populate_by_name": True}


class CapsuleRead(BaseModel):
    """A stored capsule exactly as it is persisted."""

    id: Union[int, str]
    title: str
    message: str
    open_date: str = Field(..., alias="openDate")
    created_at: Optional[str] = Field(None, alias="createdAt")

    model_config = {"populate_by_name": True}


class CapsuleView(BaseModel):
    """A capsule together with its lock state.

    The timeline endpoint clears ``message`` while the capsule is
    locked.
    """

    id: Union[int, str]
    title: str
    message: Optional[str] = None
    open_date: str = Field(..., alias="openDate")
    created_at: Optional[str] = Field(None, alias="createdAt")
    locked: bool

    model_config = {"populate_by_name": True}


class MessageResponse(BaseModel):
    """Plain ``{"message": ...}`` body used for confirmations and errors."""

    message: str
