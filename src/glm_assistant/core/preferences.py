"""Key-value preference storage for the API key and the system prompt override."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import StorageFailureError

_LOGGER = logging.getLogger(__name__)

API_KEY_PREFERENCE = "zhipu_api_key"
SYSTEM_PROMPT_PREFERENCE = "system_prompt"


class PreferenceStore(Protocol):
    """Opaque get/set capability consumed by the generation client."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` when the key was never set."""

    async def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``; raise ``StorageFailureError`` on failure."""


class InMemoryPreferenceStore:
    """Dict-backed store; values live as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStore:
    """Preferences persisted as a single UTF-8 JSON object.

    Every write replaces the file atomically, so a failed write leaves the
    previously stored values untouched.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set_sync, key, value)

    def _get_sync(self, key: str) -> str | None:
        with self._lock:
            value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageFailureError(f"Preference '{key}' in {self.path} is not a string")
        return value

    def _set_sync(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)
        _LOGGER.debug("Saved preference %s to %s", key, self.path)

    def _load(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageFailureError(f"Failed to read preferences from {self.path}: {exc}") from exc

        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageFailureError(f"Preferences file {self.path} is corrupt: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageFailureError(f"Preferences file {self.path} must contain a JSON object")
        return data

    def _dump(self, data: dict[str, object]) -> None:
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageFailureError(f"Failed to write preferences to {self.path}: {exc}") from exc


@dataclass(frozen=True)
class PreferenceField:
    """Editable preference as presented by the settings view."""

    key: str
    label: str
    description: str
    secret: bool = False
    multiline: bool = False
    suggested: str | None = None


@dataclass(frozen=True)
class PreferenceSection:
    title: str
    fields: tuple[PreferenceField, ...]


SUGGESTED_SYSTEM_PROMPT = """你是一位专业的探索助手，擅长帮助用户发现和了解新事物。在回答用户问题时，请：

1. 提供准确、客观的信息
2. 用简单易懂的语言解释复杂概念
3. 适时举例说明，帮助理解
4. 鼓励用户进一步探索和学习
5. 在必要时提供相关资源或参考链接

请以友好、专业的态度回答用户的问题。"""

SETTINGS_SECTIONS: tuple[PreferenceSection, ...] = (
    PreferenceSection(
        title="API Configuration",
        fields=(
            PreferenceField(
                key=API_KEY_PREFERENCE,
                label="Zhipu API Key",
                description="Enter your Zhipu AI API key",
                secret=True,
            ),
        ),
    ),
    PreferenceSection(
        title="Prompt Configuration",
        fields=(
            PreferenceField(
                key=SYSTEM_PROMPT_PREFERENCE,
                label="系统提示词",
                description="设置AI的角色定位和行为准则",
                multiline=True,
                suggested=SUGGESTED_SYSTEM_PROMPT,
            ),
        ),
    ),
)


def find_field(key: str) -> PreferenceField:
    for section in SETTINGS_SECTIONS:
        for field in section.fields:
            if field.key == key:
                return field
    raise KeyError(key)


def mask_secret(value: str) -> str:
    """Hide all but the last four characters of a secret."""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


__all__ = [
    "API_KEY_PREFERENCE",
    "SETTINGS_SECTIONS",
    "SUGGESTED_SYSTEM_PROMPT",
    "SYSTEM_PROMPT_PREFERENCE",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "PreferenceField",
    "PreferenceSection",
    "PreferenceStore",
    "find_field",
    "mask_secret",
]
