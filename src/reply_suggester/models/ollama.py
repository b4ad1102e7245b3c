"""Pydantic models for the Ollama generate request body."""

from __future__ import annotations

from pydantic import BaseModel, Field

REPLY_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "reply": {
            "type": "string",
        },
    },
    "required": ["reply"],
}


class GenerateOptions(BaseModel):
    temperature: float = 0


class ResponseFormat(BaseModel):
    type: str = "json_object"
    schema_: dict = Field(default_factory=lambda: dict(REPLY_SCHEMA), alias="schema")

    model_config = {"populate_by_name": True}


class GenerateRequest(BaseModel):
    """Body of ``POST /api/generate``; non-streaming, structured reply hint."""

    model: str = "gemma3"
    prompt: str
    format: str = "json"
    stream: bool = False
    options: GenerateOptions = Field(default_factory=GenerateOptions)
    response_format: ResponseFormat = Field(default_factory=ResponseFormat)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
