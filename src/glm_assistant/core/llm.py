from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from glm_assistant.adapters.models import ChatCompletionRequest, ChatCompletionResponse, ChatMessage, Role

from .errors import MalformedResponseError, MissingCredentialError
from .preferences import API_KEY_PREFERENCE, SYSTEM_PROMPT_PREFERENCE, PreferenceStore

if TYPE_CHECKING:
    from glm_assistant.adapters.zhipu_client import ZhipuAPIClient

ZHIPU_MODEL = "glm-4-flash"

DEFAULT_SYSTEM_PROMPT = """你是一位知识渊博的百科助手。请以简洁清晰的方式回答用户的问题，确保：

1. 信息准确且来源可靠
2. 回答简明扼要
3. 适当使用举例说明
4. 避免技术术语，使用通俗易懂的语言
5. 在必要时提供进一步学习的建议"""


def resolve_system_prompt(override: str | None) -> str:
    """Stored override when set and non-empty, built-in persona otherwise."""
    if override is None or override == "":
        return DEFAULT_SYSTEM_PROMPT
    return override


def build_request(system_prompt: str, user_prompt: str) -> ChatCompletionRequest:
    return ChatCompletionRequest(
        model=ZHIPU_MODEL,
        messages=[
            ChatMessage(role=Role.SYSTEM.value, content=system_prompt),
            ChatMessage(role=Role.USER.value, content=user_prompt),
        ],
    )


def extract_content(data: dict) -> str:
    """Return ``choices[0].message.content`` or raise ``MalformedResponseError``."""
    try:
        parsed = ChatCompletionResponse.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(details=data) from e

    content = parsed.first_content()
    if not content:
        raise MalformedResponseError(details=data)
    return content


class GenerationClient:
    """One-shot prompt generation against the Zhipu chat-completions API.

    Reads the API key and system prompt override from ``store`` on every
    call; no retries, caching or logging happen here.
    """

    def __init__(self, store: PreferenceStore, api_client: ZhipuAPIClient) -> None:
        self.store = store
        self.api_client = api_client

    async def compose_request(self, user_prompt: str) -> ChatCompletionRequest:
        override = await self.store.get(SYSTEM_PROMPT_PREFERENCE)
        return build_request(resolve_system_prompt(override), user_prompt)

    async def generate_response(self, user_prompt: str) -> str:
        api_key = await self.store.get(API_KEY_PREFERENCE)
        if not api_key:
            raise MissingCredentialError()
        # sent in an HTTP header, which only carries ASCII
        if not api_key.isascii():
            raise MissingCredentialError("API key contains non-ASCII characters")

        request = await self.compose_request(user_prompt)
        data = await self.api_client.create_chat_completion(api_key, request)
        return extract_content(data)
