from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .config import ASCII_PROMPTS, EMOJI_PROMPTS, ReplConfig
from .errors import QuitRequested, StepLimitExceeded
from .lines import LineSource
from .session import ReplSession
from .tokenizer import DEFAULT_QUIT_CHAR

Reader = Callable[[str], str]


def _prompted(reader: Optional[Reader], glyph: str) -> Optional[str]:
    read = reader or input
    try:
        line = read(f"{glyph}  ")
    except EOFError:
        return None
    return line.strip()


def console_line_source(config: ReplConfig, reader: Optional[Reader] = None) -> LineSource:
    def read_byte() -> Optional[str]:
        return _prompted(reader, config.prompts.byte)

    return read_byte


def build_session(config: ReplConfig, reader: Optional[Reader] = None) -> ReplSession:
    return ReplSession(config, read_line=console_line_source(config, reader))


def run_repl(session: ReplSession, reader: Optional[Reader] = None) -> None:
    prompts = session.config.prompts
    print(f'Starting BrainF REPL (type "{session.config.quit_char}" to quit)')
    while True:
        line = _prompted(reader, prompts.input)
        if line is None:
            print()
            return
        try:
            evaluation = session.feed(line)
            while evaluation.needs_continuation:
                line = _prompted(reader, prompts.continuation)
                if line is None:
                    print()
                    return
                evaluation = session.feed(line)
        except QuitRequested:
            return
        except StepLimitExceeded as exc:
            print(f"{prompts.error}  {exc}")
        else:
            if evaluation.error:
                print(f"{prompts.error}  {evaluation.error}")
            if evaluation.output:
                print(evaluation.output)
        print(f"{prompts.state}  {session.render_tape()}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive tape-language REPL")
    parser.add_argument(
        "--quit-char",
        default=DEFAULT_QUIT_CHAR,
        help='Character that ends the session (default: "?")',
    )
    parser.add_argument(
        "--ascii-prompts",
        action="store_true",
        help="Use plain ASCII prompt markers instead of emoji",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort an evaluation after this many instructions (default: unlimited)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level written to stderr (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = ReplConfig(
            quit_char=args.quit_char,
            prompts=ASCII_PROMPTS if args.ascii_prompts else EMOJI_PROMPTS,
            max_steps=args.max_steps,
        )
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    run_repl(build_session(config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
