"""Shared response models for endpoints that return simple JSON dicts."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
