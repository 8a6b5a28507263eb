from glm_assistant.core import get_settings
from glm_assistant.core.logging import configure_logging
from glm_assistant.interfaces.chat_cli import cli


def main() -> None:
    configure_logging(log_level=get_settings().effective_log_level)
    cli()


if __name__ == "__main__":
    main()
