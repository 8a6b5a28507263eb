"""Core application logic"""

from .config import Settings, get_settings
from .errors import (
    AssistantError,
    EmptyPromptError,
    FailureKind,
    MalformedResponseError,
    MissingCredentialError,
    NetworkFailureError,
    StorageFailureError,
)
from .history import GenerationHistory, GenerationResult
from .llm import DEFAULT_SYSTEM_PROMPT, ZHIPU_MODEL, GenerationClient
from .preferences import (
    API_KEY_PREFERENCE,
    SYSTEM_PROMPT_PREFERENCE,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    PreferenceStore,
)

__all__ = [
    "API_KEY_PREFERENCE",
    "DEFAULT_SYSTEM_PROMPT",
    "SYSTEM_PROMPT_PREFERENCE",
    "ZHIPU_MODEL",
    "AssistantError",
    "EmptyPromptError",
    "FailureKind",
    "GenerationClient",
    "GenerationHistory",
    "GenerationResult",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "MalformedResponseError",
    "MissingCredentialError",
    "NetworkFailureError",
    "PreferenceStore",
    "Settings",
    "StorageFailureError",
    "get_settings",
]
