"""CLI adapter to ask the assistant a question about the ledger."""

import asyncio
import sys

from finledger.application.use_cases.assistant_chat import SUGGESTED_QUESTIONS
from finledger.infrastructure.container import (
    build_chat_use_case,
    build_ledger_repositories,
    build_settings,
)
from finledger.infrastructure.logging.logger import get_app_logger


def main(argv: list[str] | None = None) -> None:
    """Send the question given on the command line and print the reply."""
    logger = get_app_logger()
    settings = build_settings()
    args = sys.argv[1:] if argv is None else argv
    question = " ".join(args).strip()
    if not question:
        print("Ask a question, for example:")
        for suggestion in SUGGESTED_QUESTIONS:
            print(f"  - {suggestion}")
        return
    if not settings.is_assistant_configured:
        logger.warning("GEMINI_API_KEY is required to ask the assistant.")
        return

    repositories = build_ledger_repositories(settings=settings)
    use_case = build_chat_use_case(repositories, settings=settings)
    streamed: list[str] = []

    def _print_delta(delta: str) -> None:
        streamed.append(delta)
        print(delta, end="", flush=True)

    try:
        reply = asyncio.run(use_case.ask(question, on_delta=_print_delta))
    finally:
        repositories.session.close()

    if streamed:
        print()
    if "".join(streamed) != reply.content:
        print(reply.content)


if __name__ == "__main__":  # pragma: no cover
    main()
