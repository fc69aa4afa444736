"""Pydantic schemas for catalog endpoints."""

from pydantic import BaseModel, EmailStr, Field


class EmailRecordForm(BaseModel):
    """Fields submitted by the email modal."""

    to: EmailStr
    message: str | None = Field(default=None, max_length=2000)
