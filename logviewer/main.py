from __future__ import annotations

import argparse
import os
import logging
import sys
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import anyio
from anyio import to_thread

from logviewer.core.config_loader import load_config
from logviewer.core.errors import LogViewerError
from logviewer.core.host import PROCEED, HostSurface
from logviewer.core.pipeline import DecodePipeline

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConsoleHost(HostSurface):
    """Terminal host: text goes to stdout, prompts and notices to stderr."""

    def __init__(self, assume_yes: bool = False, out=None, err=None):
        self.assume_yes = assume_yes
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    async def show(self, title: str, text: str) -> str:
        self.out.write(text)
        if text and not text.endswith("\n"):
            self.out.write("\n")
        self.out.flush()
        return f"console:{title}:{uuid.uuid4().hex[:8]}"

    async def confirm(self, message: str, options: Sequence[str]) -> Optional[str]:
        if self.assume_yes:
            self.err.write(f"{message} [{PROCEED}]\n")
            return PROCEED

        self.err.write(f"{message} [{'/'.join(options)}] ")
        self.err.flush()
        try:
            answer = await to_thread.run_sync(sys.stdin.readline)
        except OSError:
            return None
        answer = answer.strip()
        if answer.lower() in ("p", "proceed", "y", "yes"):
            return PROCEED
        return answer or None

    async def notify(self, message: str) -> None:
        self.err.write(f"{message}\n")

    async def notify_error(self, message: str) -> None:
        self.err.write(f"{message}\n")


def configure_logging(logs_dir: Optional[str], verbose: bool = False):
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handlers = [console]

    # The log file plays the role of an output channel: "Opening: ..." and errors
    if logs_dir:
        Path(logs_dir).mkdir(parents=True, exist_ok=True)
        channel = logging.FileHandler(Path(logs_dir) / "logviewer.log", encoding="utf-8")
        channel.setLevel(logging.INFO)
        handlers.append(channel)

    logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, handlers=handlers, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logviewer",
        description="Print the decompressed text of a .xz or .tar.xz log file.",
    )
    parser.add_argument("path", help="Path to a .xz or .tar.xz file.")
    parser.add_argument("--threshold", type=int, default=None,
                        help="Decoded size in bytes above which the file is written to disk instead.")
    parser.add_argument("--yes", action="store_true", help="Answer Proceed to every prompt.")
    parser.add_argument("--config", default=None, help="Path to a config YAML (overrides LOG_VIEWER_CONFIG_FILE).")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.config:
        os.environ["LOG_VIEWER_CONFIG_FILE"] = str(Path(args.config).resolve())

    config = load_config()
    settings = config["settings"]
    if config["status"] == "ERROR":
        # Defaults still work without a config file
        sys.stderr.write(f"Config warning: {config['error']}\n")
    if args.threshold is not None:
        if args.threshold < 0:
            sys.stderr.write("--threshold must be non-negative\n")
            return 2
        settings = replace(settings, threshold_bytes=args.threshold)

    configure_logging(settings.logs_dir, args.verbose)

    pipeline = DecodePipeline(ConsoleHost(assume_yes=args.yes), settings)
    try:
        anyio.run(pipeline.open, args.path)
    except LogViewerError:
        # Already reported by the pipeline
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
