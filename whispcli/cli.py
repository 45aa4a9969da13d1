"""Command-line entrypoint: ``whispcli [global options] <command> [args]``."""

import argparse
import sys
from typing import List, Optional

from .config import CONFIG_PATH, MODELS_DIR, VERSION
from .errors import WhispcliError
from .log import LOG_LEVELS, build_logger, quiet_level
from .settings import load_config

COMMANDS_HELP = """commands:
  transcribe   Transcribe a media file
  setup        Enter interactive setup mode
  version      Show application version

Any other first argument is taken as a media file to transcribe."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whispcli",
        description="Transcribe media files locally with whisper.cpp",
        epilog=COMMANDS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--model", default="",
        help="Path to the whisper.cpp model file. Overrides the configured default.",
    )
    parser.add_argument(
        "--stdout", action="store_true",
        help="Write the transcript to stdout instead of a .txt file next to the input",
    )
    parser.add_argument(
        "--log-level", choices=list(LOG_LEVELS), default="info",
        help="Log verbosity (default: info)",
    )
    parser.add_argument("command", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)
    return parser


def transcribe_command(args: List[str], opts: argparse.Namespace) -> int:
    sub = argparse.ArgumentParser(
        prog="whispcli transcribe",
        description="Use the global --model flag to override the default model path.",
    )
    sub.add_argument("media", help="Media file to transcribe")
    parsed = sub.parse_args(args)

    level = quiet_level(opts.log_level) if opts.stdout else opts.log_level
    logger = build_logger(level)

    config = load_config(CONFIG_PATH, MODELS_DIR)
    model_path = opts.model or config.default_model_path

    from .transcriber import FileTranscriber

    FileTranscriber(model_path, logger, to_stdout=opts.stdout).run_file(parsed.media)
    return 0


def setup_command(opts: argparse.Namespace) -> int:
    from .setup_menu import run_setup

    run_setup(build_logger(opts.log_level), CONFIG_PATH, MODELS_DIR)
    return 0


def show_version() -> int:
    print(f"whispcli: {VERSION}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    opts = parser.parse_args(argv)

    if not opts.command:
        parser.print_usage(sys.stderr)
        print(COMMANDS_HELP, file=sys.stderr)
        return 1

    try:
        if opts.command == "setup":
            return setup_command(opts)
        if opts.command == "version":
            return show_version()
        if opts.command == "transcribe":
            return transcribe_command(opts.args, opts)
        # not a command name: treat it as the file to transcribe
        return transcribe_command([opts.command] + opts.args, opts)
    except (WhispcliError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
