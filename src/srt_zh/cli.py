"""Command-line interface for srt-zh."""

from __future__ import annotations

import asyncio
import argparse
import logging
import sys
from pathlib import Path

from .config import (
    TranslatorConfig,
    API_KEY_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_RETRIES,
    DEFAULT_BACKOFF_BASE_MS,
)
from .errors import SrtTranslatorError
from .parser import read_srt, save_srt, validate_srt_file
from .progress import ProgressBar
from .translator import SubtitleTranslator


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="srt-zh",
        description="Translate English SRT subtitles to Simplified Chinese with an LLM",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s video.srt                     # Writes translated_video.srt
  %(prog)s video.srt -o output.srt       # Specify output
  %(prog)s video.srt --chunk-size 10     # Smaller requests
        """
    )

    # Positional arguments
    parser.add_argument("input_path", help="Input SRT file path")
    parser.add_argument("output_path", nargs='?', default=None, help="Output SRT file path")
    parser.add_argument("-o", "--output", dest="output_flag", default=None, help="Output SRT file path")

    # API options
    parser.add_argument("--api-key", help=f"API key (or set {API_KEY_ENV})")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--model", dest="model_name", default=DEFAULT_MODEL)
    parser.add_argument("--temperature", type=float, default=DEFAULT_TEMPERATURE)
    parser.add_argument("--timeout", type=float, default=60.0, help="Request timeout in seconds")

    # Batching / retry
    parser.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE,
                        help="Subtitle entries per request")
    parser.add_argument("--max-retries", type=int, default=DEFAULT_MAX_RETRIES,
                        help="Retries per chunk after the first attempt")
    parser.add_argument("--backoff-base-ms", type=int, default=DEFAULT_BACKOFF_BASE_MS,
                        help="Retry n waits 2^n * base milliseconds")

    # Misc
    parser.add_argument("--no-progress-bar", action="store_true", help="Hide the progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    return parser


def resolve_output_path(in_path: Path, output: str | None, prefix: str) -> Path:
    """Explicit output path, or ``<prefix><name>`` next to the input."""
    if output:
        return Path(output).expanduser()
    return in_path.with_name(f"{prefix}{in_path.name}")


async def main_async(args: argparse.Namespace) -> int:
    """Main async workflow."""
    logger = logging.getLogger(__name__)
    config = TranslatorConfig.from_args(args)

    error = config.validate()
    if error:
        logger.error(error)
        return 1

    in_path = Path(args.input_path).expanduser().resolve()
    error = validate_srt_file(in_path)
    if error:
        logger.error(error)
        return 1

    out_path = resolve_output_path(in_path, args.output_flag or args.output_path, config.output_prefix)

    try:
        entries = read_srt(in_path)
        translator = SubtitleTranslator.from_config(config)

        with ProgressBar(len(entries), disable=args.no_progress_bar) as bar:
            translated = await translator.translate(entries, on_progress=bar)
    except SrtTranslatorError as e:
        logger.error(str(e))
        return 1

    save_srt(translated, out_path)
    logger.info(f"Done! {len(translated)} entries translated. Saved to {out_path}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        exit_code = asyncio.run(main_async(args))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        sys.exit(130)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
