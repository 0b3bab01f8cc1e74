"""Request Schemas — Pydantic models for the JSON bodies the gateway accepts.

Invariants:
    - Required fields are Optional here: presence is checked by the route's
      RequiredField list so each route reports its own message, in order
    - Wrong types (e.g. an object where a string is expected) fail at this
      layer and surface as 400 "Invalid request data"
    - Optional lists (cc, bcc, attachments) default to empty, never None
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CivilInfoRequest(BaseModel):
    """ROP lookup by civil id and card expiry date."""
    civilId: str | int | None = None
    expiryDate: str | None = None


class SendSmsRequest(BaseModel):
    """Bulk SMS push; mobiles as a list or one comma-separated string."""
    message: str | None = None
    mobiles: list[str | int] | str | int | None = None

    @field_validator("mobiles")
    @classmethod
    def split_mobiles(cls, v) -> list[str] | None:
        if v is None:
            return None
        if isinstance(v, str):
            items = v.split(",")
        elif isinstance(v, int):
            items = [v]
        else:
            items = v
        return [str(m).strip() for m in items if str(m).strip()]


class Attachment(BaseModel):
    """File attachment; contentBytes is base64 encoded by the caller."""
    name: str = Field(min_length=1)
    contentBytes: str = Field(min_length=1)
    contentType: str | None = None


class SendEmailRequest(BaseModel):
    """Mail send: recipients/subject/content required, the rest optional."""
    recipients: list[str] | None = None
    subject: str | None = None
    content: str | None = None
    contentType: Literal["HTML", "Text"] = "HTML"
    cc: list[str] = Field(default_factory=list)
    bcc: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)

    @field_validator("cc", "bcc", "attachments", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v
