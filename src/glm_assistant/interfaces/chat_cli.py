#!/usr/bin/env python3
"""
Command-line front end for the GLM assistant

Usage:
    glm-assistant ask "What is a black hole?"
    glm-assistant chat
    glm-assistant settings set-key
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path

import click

from glm_assistant.adapters import ZhipuAPIClient
from glm_assistant.core import (
    API_KEY_PREFERENCE,
    DEFAULT_SYSTEM_PROMPT,
    SYSTEM_PROMPT_PREFERENCE,
    AssistantError,
    EmptyPromptError,
    GenerationClient,
    GenerationHistory,
    JsonFilePreferenceStore,
    MissingCredentialError,
    PreferenceStore,
    Settings,
    StorageFailureError,
    get_settings,
)
from glm_assistant.core.preferences import SETTINGS_SECTIONS, find_field, mask_secret
from glm_assistant.interfaces.session import PromptSession


@dataclass
class AppContext:
    settings: Settings
    store: PreferenceStore


def build_api_client(settings: Settings) -> ZhipuAPIClient:
    return ZhipuAPIClient(timeout=settings.request_timeout)


def _report_error(exc: Exception) -> None:
    click.echo(f"❌ Error: {exc}", err=True)
    if isinstance(exc, MissingCredentialError):
        click.echo("   Set your API key with: glm-assistant settings set-key", err=True)


def _render_history(history: GenerationHistory) -> None:
    if not len(history):
        click.echo("📭 History is empty")
        return
    click.echo("📜 Generation history")
    for result in history:
        click.echo(f"\n[{result.local_time():%Y-%m-%d %H:%M:%S}] Prompt: {result.prompt}")
        click.echo(result.response)


@click.group()
@click.option(
    "--preferences",
    "preferences_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Preferences file (or use GLM_ASSISTANT_PREFERENCES)",
)
@click.pass_context
def cli(ctx: click.Context, preferences_path: Path | None) -> None:
    """Ask Zhipu GLM questions from the terminal"""
    settings = get_settings()
    ctx.obj = AppContext(settings=settings, store=JsonFilePreferenceStore(preferences_path or settings.preferences_path))


@cli.command()
@click.argument("prompt")
@click.pass_obj
def ask(app: AppContext, prompt: str) -> None:
    """Send a single prompt and print the response"""

    async def _ask() -> str:
        async with build_api_client(app.settings) as api_client:
            session = PromptSession(GenerationClient(app.store, api_client))
            result = await session.submit(prompt)
            return result.response

    try:
        response = asyncio.run(_ask())
    except (AssistantError, EmptyPromptError) as e:
        _report_error(e)
        sys.exit(1)

    click.echo(response)


@cli.command()
@click.pass_obj
def chat(app: AppContext) -> None:
    """Start an interactive session"""
    click.echo("=" * 70)
    click.echo("🤖 GLM Assistant (Zhipu AI)")
    click.echo("=" * 70)
    click.echo("Commands:")
    click.echo("  - type a question and press Enter")
    click.echo("  - 'history' - show previous answers")
    click.echo("  - 'clear' - clear history")
    click.echo("  - 'exit' or 'quit' - leave")
    click.echo("=" * 70)

    asyncio.run(_chat_loop(app))


async def _chat_loop(app: AppContext) -> None:
    async with build_api_client(app.settings) as api_client:
        session = PromptSession(GenerationClient(app.store, api_client))

        while True:
            try:
                user_input = click.prompt("\n👤 You", type=str, prompt_suffix=": ")
            except (KeyboardInterrupt, click.Abort):
                click.echo("\n👋 Goodbye!")
                return

            command = user_input.strip().lower()
            if command in {"exit", "quit"}:
                click.echo("👋 Goodbye!")
                return
            if command == "clear":
                session.history.clear()
                click.echo("🔄 History cleared")
                continue
            if command == "history":
                _render_history(session.history)
                continue

            click.echo("🤖 Generating...")
            try:
                result = await session.submit(user_input)
            except EmptyPromptError as e:
                click.echo(f"⚠️  {e}", err=True)
                continue
            except AssistantError as e:
                _report_error(e)
                continue

            click.echo(f"🤖 Assistant: {result.response}")


@cli.group()
def settings() -> None:
    """View and edit saved preferences"""


@settings.command("show")
@click.pass_obj
def show_settings(app: AppContext) -> None:
    """Print the saved preferences"""

    async def _load() -> dict[str, str | None]:
        return {
            field.key: await app.store.get(field.key)
            for section in SETTINGS_SECTIONS
            for field in section.fields
        }

    try:
        values = asyncio.run(_load())
    except StorageFailureError as e:
        _report_error(e)
        sys.exit(1)

    for section in SETTINGS_SECTIONS:
        click.echo(f"== {section.title}")
        for field in section.fields:
            value = values.get(field.key)
            click.echo(f"{field.label}: {field.description}")
            if not value:
                if field.key == SYSTEM_PROMPT_PREFERENCE:
                    click.echo("  (not set, built-in prompt in use)")
                    click.echo(DEFAULT_SYSTEM_PROMPT)
                else:
                    click.echo("  (not set)")
            elif field.secret:
                click.echo(f"  {mask_secret(value)}")
            else:
                click.echo(value)
        click.echo("")


def _save(store: PreferenceStore, key: str, value: str) -> None:
    try:
        asyncio.run(store.set(key, value))
    except StorageFailureError as e:
        _report_error(e)
        sys.exit(1)


@settings.command("set-key")
@click.argument("api_key", required=False)
@click.pass_obj
def set_key(app: AppContext, api_key: str | None) -> None:
    """Save the Zhipu API key (prompted when omitted)"""
    if api_key is None:
        api_key = click.prompt("Zhipu API Key", hide_input=True)
    api_key = api_key.strip()
    if not api_key:
        click.echo("❌ Error: API key cannot be empty", err=True)
        sys.exit(1)
    if not api_key.isascii():
        click.echo("❌ Error: API key contains non-ASCII characters", err=True)
        sys.exit(1)

    _save(app.store, API_KEY_PREFERENCE, api_key)
    click.echo("✅ API key saved")


@settings.command("set-prompt")
@click.argument("text", required=False)
@click.pass_obj
def set_prompt(app: AppContext, text: str | None) -> None:
    """Save the system prompt override (opens an editor when omitted)

    An empty prompt restores the built-in one.
    """
    if text is None:
        try:
            current = asyncio.run(app.store.get(SYSTEM_PROMPT_PREFERENCE))
        except StorageFailureError as e:
            _report_error(e)
            sys.exit(1)
        edited = click.edit(current or find_field(SYSTEM_PROMPT_PREFERENCE).suggested)
        if edited is None:
            click.echo("No changes")
            return
        text = edited.rstrip("\n")

    _save(app.store, SYSTEM_PROMPT_PREFERENCE, text)
    if text:
        click.echo("✅ System prompt saved")
    else:
        click.echo("✅ System prompt cleared, built-in prompt in use")


if __name__ == "__main__":
    cli()
