"""Command-line front end for the Pixwell API.

Usage:
    pixwell screenshot https://example.com -o example.png --width 1920 --height 1080
    pixwell batch https://example.com https://python.org -o shots/ --format jpeg
    pixwell usage

The API key is read from --api-key or PIXWELL_API_KEY.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from . import __version__
from .client import Pixwell
from .errors import PixwellError
from .types import BatchOptions, CaptureOptions, ScreenshotOptions

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
}


def format_size(size: float) -> str:
    """Format byte size as human-readable string."""
    for unit in ["B", "KB", "MB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def _capture_fields(args: argparse.Namespace) -> dict:
    fields = {
        "width": args.width,
        "height": args.height,
        "full_page": args.full_page,
        "format": args.format,
        "quality": args.quality,
        "mobile": args.mobile,
        "dark_mode": args.dark_mode,
        "delay": args.delay,
        "cache_ttl": args.cache_ttl,
    }
    if args.selector:
        fields["selector"] = args.selector
    return fields


def _make_client(args: argparse.Namespace) -> Pixwell:
    return Pixwell.from_env(api_key=args.api_key, base_url=args.base_url, timeout=args.timeout)


async def _run_screenshot(client: Pixwell, args: argparse.Namespace) -> None:
    options = ScreenshotOptions(url=args.url, **_capture_fields(args))
    result = await client.screenshot(options)

    output = Path(args.output or f"screenshot.{_EXTENSIONS.get(result.content_type, args.format)}")
    output.parent.mkdir(parents=True, exist_ok=True)
    result.save(str(output))

    cache = "cache hit" if result.cached else "fresh"
    print(f"✓ {args.url}: {format_size(result.size)}, {result.duration_ms}ms ({cache}), saved: {output}")


async def _run_batch(client: Pixwell, args: argparse.Namespace) -> None:
    shared = CaptureOptions(**_capture_fields(args))
    result = await client.batch(BatchOptions(urls=args.urls, options=shared))

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    for i, item in enumerate(result.results):
        if item.success and item.data is None:
            print(f"✗ {item.url}: no image data in response")
        elif item.success:
            ext = _EXTENSIONS.get(item.content_type or "", args.format)
            filepath = output_dir / f"{i:02d}.{ext}"
            item.save(str(filepath))
            print(f"✓ {item.url}: {format_size(item.size or 0)}, {item.duration_ms or 0}ms, saved: {filepath.name}")
        else:
            error = item.error
            detail = f"{error.code}: {error.message}" if error else "unknown error"
            print(f"✗ {item.url}: {detail}")

    summary = result.summary
    print(
        f"\n{summary.succeeded}/{summary.total} succeeded, "
        f"{summary.failed} failed, {summary.total_duration_ms}ms total"
    )


async def _run_usage(client: Pixwell, args: argparse.Namespace) -> None:
    usage = await client.usage()
    print(f"Plan:    {usage.plan.name} (max {usage.plan.max_width}x{usage.plan.max_height})")
    print(f"Daily:   {usage.daily.used}/{usage.daily.limit} ({usage.daily.remaining} remaining)")
    print(f"Monthly: {usage.monthly.used}/{usage.monthly.limit} ({usage.monthly.remaining} remaining)")


_COMMANDS = {
    "screenshot": _run_screenshot,
    "batch": _run_batch,
    "usage": _run_usage,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixwell",
        description="Capture screenshots with the Pixwell API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--api-key", help="API key (default: $PIXWELL_API_KEY)")
    parser.add_argument("--base-url", help="API endpoint (default: $PIXWELL_BASE_URL)")
    parser.add_argument("--timeout", type=int, help="Request timeout in ms (default: $PIXWELL_TIMEOUT)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    capture = argparse.ArgumentParser(add_help=False)
    capture.add_argument("--width", type=int, default=1280, help="Viewport width in pixels")
    capture.add_argument("--height", type=int, default=720, help="Viewport height in pixels")
    capture.add_argument("--full-page", action="store_true", help="Capture the full scrollable page")
    capture.add_argument("--format", choices=["png", "jpeg", "webp"], default="png", help="Image format")
    capture.add_argument("--quality", type=int, default=80, help="Image quality 1-100 (jpeg/webp)")
    capture.add_argument("--mobile", action="store_true", help="Emulate a mobile device")
    capture.add_argument("--dark-mode", action="store_true", help="Enable dark mode")
    capture.add_argument("--delay", type=int, default=0, help="Wait time in ms before capture")
    capture.add_argument("--selector", help="CSS selector of the element to capture")
    capture.add_argument("--cache-ttl", type=int, default=0, help="Server-side cache TTL in seconds")

    commands = parser.add_subparsers(dest="command", required=True)

    shot = commands.add_parser("screenshot", parents=[capture], help="Capture a single URL")
    shot.add_argument("url", help="URL to capture")
    shot.add_argument("-o", "--output", help="Output file (default: screenshot.<format>)")

    batch = commands.add_parser("batch", parents=[capture], help="Capture up to 10 URLs")
    batch.add_argument("urls", nargs="+", help="URLs to capture")
    batch.add_argument("-o", "--output", default="./captures", help="Output directory")

    commands.add_parser("usage", help="Show usage statistics")

    return parser


async def _run(args: argparse.Namespace) -> None:
    client = _make_client(args)
    async with client:
        await _COMMANDS[args.command](client, args)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        asyncio.run(_run(args))
    except PixwellError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"✗ {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
