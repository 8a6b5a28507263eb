"""Pydantic models for the Zhipu chat-completions wire format."""

from __future__ import annotations

import json
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single conversation message."""

    model_config = ConfigDict(extra="ignore")

    role: str
    content: Optional[str] = None


class ChatCompletionRequest(BaseModel):
    """Request body: a model identifier and the ordered messages."""

    model: str
    messages: List[ChatMessage]

    def to_json_bytes(self) -> bytes:
        """Compact UTF-8 JSON with non-ASCII text left unescaped."""
        payload = self.model_dump(mode="json")
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: ChatMessage


class ChatCompletionResponse(BaseModel):
    """Subset of the response body the client relies on."""

    model_config = ConfigDict(extra="ignore")

    choices: List[Choice]

    def first_content(self) -> Optional[str]:
        if not self.choices:
            return None
        return self.choices[0].message.content
