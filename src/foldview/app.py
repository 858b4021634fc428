"""Terminal viewer for JSON, YAML, XML and plain text documents."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from textual.app import App, ComposeResult

from foldview import __version__
from foldview.config import load_config
from foldview.formats import DocumentLoadError, read_document, resolve_format_order
from foldview.session import ViewerSession
from foldview.widget import DocumentViewer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class FoldViewApp(App):
    """TUI app that wraps the DocumentViewer widget."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #viewer {
        height: 1fr;
    }
    """

    TITLE = "foldview"
    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, session: ViewerSession, file_path: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.file_path = file_path

    def compose(self) -> ComposeResult:
        yield DocumentViewer(self.session, id="viewer")

    def on_mount(self) -> None:
        self.sub_title = self.file_path
        self.query_one("#viewer").focus()

    def on_document_viewer_quit(self, event: DocumentViewer.Quit) -> None:
        self.exit()


def setup_logging(log_file: str | None, level: str = "INFO") -> None:
    """Send package logs to *log_file*; the terminal belongs to the viewer."""
    root = logging.getLogger("foldview")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    if not log_file:
        root.addHandler(logging.NullHandler())
        return
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foldview",
        description="View JSON, YAML, XML or text with folding and search",
    )
    parser.add_argument("file", nargs="?", default="", help="file to view")
    parser.add_argument(
        "-v", "--version",
        action="store_true",
        default=False,
        help="show version information",
    )
    parser.add_argument(
        "-f", "--format",
        default=None,
        help="format to use (json, yaml, xml, raw)",
    )
    parser.add_argument(
        "-t", "--tab-size",
        type=_positive_int,
        default=None,
        help="indent width (overrides the config file)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="write logs to this file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for --log-file",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return

    setup_logging(args.log_file, args.log_level)

    if not args.file:
        print("foldview: no file given", file=sys.stderr)
        sys.exit(1)

    config = load_config()
    tab_size = args.tab_size or config.tab_size
    order = resolve_format_order(args.format, config.format_order)

    try:
        lines, format_name = read_document(args.file, order, tab_size)
    except DocumentLoadError as exc:
        print(f"foldview: {exc}", file=sys.stderr)
        sys.exit(1)

    logger.info("viewing %s as %s", args.file, format_name)
    session = ViewerSession(lines, format_name=format_name, tab_size=tab_size)
    app = FoldViewApp(session, file_path=args.file)
    app.run()


if __name__ == "__main__":
    main()
