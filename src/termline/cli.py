"""Entry point for the termline demo CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging

from termline.ansi import AnsiRenderer
from termline.config import EditorConfig
from termline.editor import LineEditor
from termline.events import EditorEvent, LineEvent, SelectionEvent
from termline.render import EOL, show_cursor
from termline.terminal import ProcessTerminal


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="termline: interactive line editor")
    parser.add_argument("--prompt", default=None, help="Prompt text (default: '> ')")
    parser.add_argument(
        "--select",
        default=None,
        metavar="A,B,C",
        help="Show a one-shot selection prompt over comma-separated options",
    )
    parser.add_argument(
        "--log-level", default="warning", choices=["debug", "info", "warning", "error"]
    )
    return parser


async def _run(config: EditorConfig, options: list[str] | None) -> int:
    terminal = ProcessTerminal()
    renderer = AnsiRenderer(write_log=config.write_log)
    editor = LineEditor(terminal, output=renderer, options=options, config=config)
    terminal.on_eof = editor.close
    exit_code = 0

    def on_event(event: EditorEvent) -> None:
        nonlocal exit_code
        match event:
            case LineEvent(committed=False):
                editor.clear_line()
                editor.prompt()
            case SelectionEvent(choice=None):
                exit_code = 1
                editor.close()
            case SelectionEvent(choice=choice):
                editor.write(f"{choice}{EOL}")
                editor.close()

    editor.subscribe(on_event)
    terminal.start()
    try:
        if options is not None:
            editor.set_selection_mode(True)
            editor.prompt()
            editor.prompt_options()
        else:
            editor.prompt()
        async for line in editor.lines:
            editor.write(f"{line}{EOL}")
            editor.prompt()
    finally:
        terminal.stop()
        renderer.render(show_cursor())
        renderer.write(EOL)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = EditorConfig.from_env()
    if args.prompt is not None:
        config.prompt = args.prompt
    options = None
    if args.select is not None:
        options = [option.strip() for option in args.select.split(",") if option.strip()]

    return asyncio.run(_run(config, options))


if __name__ == "__main__":
    raise SystemExit(main())
