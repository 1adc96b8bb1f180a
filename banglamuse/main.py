"""Command-line entry point for the writing studio."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from banglamuse.categories import CategoryId, LengthOption
from banglamuse.chains.refiner import RefineAction
from banglamuse.config import settings
from banglamuse.history import HistoryItemNotFoundError, HistoryStore
from banglamuse.studio import Studio
from banglamuse.ui.utils import format_category_bn, format_timestamp, truncate_text, word_count

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _read_text(path: str | None) -> str:
    if not path:
        return ""
    return Path(path).read_text(encoding="utf-8")


def _open_studio() -> Studio:
    history = HistoryStore(settings.history_file, key=settings.history_key)
    history.load()
    return Studio(history=history)


def _load_source(studio: Studio, args: argparse.Namespace) -> None:
    """Put the text to work on into the studio, from history or a file."""
    if args.history_id:
        studio.load_history_item(args.history_id)
    elif args.input:
        studio.state.generated_content = _read_text(args.input)
        studio.state.topic = Path(args.input).stem


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        logger.info(f"Wrote {word_count(text)} words to {output}")
    else:
        print(text)


def cmd_generate(args: argparse.Namespace) -> int:
    studio = _open_studio()
    state = asyncio.run(
        studio.generate(
            category=args.category,
            topic=args.topic,
            style_sample=_read_text(args.style_file),
            length=args.length,
            creativity=args.creativity,
        )
    )
    if state.error_message:
        logger.error(state.error_message)
        return 1
    _write_output(state.generated_content, args.output)
    return 0


def cmd_refine(args: argparse.Namespace) -> int:
    studio = _open_studio()
    _load_source(studio, args)
    if not studio.state.generated_content:
        logger.error("Nothing to refine. Use --history-id or --input")
        return 1

    state = asyncio.run(studio.refine(args.action))
    if state.error_message:
        logger.error(state.error_message)
        return 1
    _write_output(state.generated_content, args.output)
    return 0


def cmd_speak(args: argparse.Namespace) -> int:
    studio = _open_studio()
    _load_source(studio, args)
    if not studio.state.generated_content:
        logger.error("Nothing to read aloud. Use --history-id or --input")
        return 1

    state = asyncio.run(studio.toggle_speech())
    clip = studio.playback.current
    if state.error_message or clip is None:
        logger.error(state.error_message or "No audio produced")
        return 1

    Path(args.output).write_bytes(clip.audio)
    logger.info(f"Wrote {len(clip.audio)} bytes of audio to {args.output}")
    studio.stop_audio()
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    store = HistoryStore(settings.history_file, key=settings.history_key)
    store.load()

    if args.history_command == "list":
        for item in store.items:
            print(
                f"{item.id}  {format_timestamp(item.timestamp)}  "
                f"{format_category_bn(item.category.value)}  "
                f"{truncate_text(item.topic, 40)}  ({word_count(item.content)} words)"
            )
    elif args.history_command == "show":
        print(store.get(args.id).content)
    elif args.history_command == "delete":
        if not store.delete(args.id):
            logger.error(f"History item not found: {args.id}")
            return 1
        logger.info(f"Deleted history item {args.id}")
    elif args.history_command == "clear":
        store.clear()
        logger.info("History cleared")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("banglamuse.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="banglamuse",
        description="Generate, refine and read aloud Bengali writing with Gemini",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write new content from a topic")
    generate.add_argument("topic", help="Topic or idea to write about")
    generate.add_argument(
        "--category",
        choices=[c.value for c in CategoryId],
        default=CategoryId.ARTICLE.value,
    )
    generate.add_argument(
        "--length",
        choices=[o.value for o in LengthOption],
        default=LengthOption.MEDIUM.value,
    )
    generate.add_argument("--creativity", type=float, default=None, help="0.0 to 1.0")
    generate.add_argument("--style-file", default=None, help="File with a writing sample to imitate")
    generate.add_argument("-o", "--output", default=None, help="Write the result to a file")
    generate.set_defaults(func=cmd_generate)

    refine = subparsers.add_parser("refine", help="Shorten, expand or polish existing text")
    refine.add_argument("action", choices=[a.value for a in RefineAction])
    source = refine.add_mutually_exclusive_group()
    source.add_argument("--history-id", default=None, help="Refine a history entry")
    source.add_argument("--input", default=None, help="Refine the text of a file")
    refine.add_argument("-o", "--output", default=None, help="Write the result to a file")
    refine.set_defaults(func=cmd_refine)

    speak = subparsers.add_parser("speak", help="Synthesize speech to a WAV file")
    speak_source = speak.add_mutually_exclusive_group()
    speak_source.add_argument("--history-id", default=None, help="Read a history entry")
    speak_source.add_argument("--input", default=None, help="Read the text of a file")
    speak.add_argument("-o", "--output", required=True, help="Destination WAV file")
    speak.set_defaults(func=cmd_speak)

    history = subparsers.add_parser("history", help="Inspect or edit the history list")
    history_sub = history.add_subparsers(dest="history_command", required=True)
    history_sub.add_parser("list", help="List entries, most recent first")
    show = history_sub.add_parser("show", help="Print an entry's content")
    show.add_argument("id")
    delete = history_sub.add_parser("delete", help="Delete an entry")
    delete.add_argument("id")
    history_sub.add_parser("clear", help="Delete every entry")
    history.set_defaults(func=cmd_history)

    serve = subparsers.add_parser("serve", help="Run the web studio")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main function for the studio CLI."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        code = args.func(args)
    except HistoryItemNotFoundError as e:
        logger.error(f"History item not found: {e}")
        code = 1
    except Exception as e:
        logger.error(f"Command failed: {e}")
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
