"""Pydantic models for REST API request/response validation."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Chat ---

class ChatBody(BaseModel):
    prompt: str = Field(..., min_length=1)


class ErrorOut(BaseModel):
    error: str


# --- Health ---

class HealthOut(BaseModel):
    status: str
    version: str
    agent_ready: bool
