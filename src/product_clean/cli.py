"""Command-line front end: upload a product photo, describe the edit, save the result.

Example::

    product-clean data/raw/mug.jpg --action remove-background --comparison compare.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from product_clean.comparison import INITIAL_POSITION, clamp, render_comparison_payload
from product_clean.config import Settings
from product_clean.errors import ProductCleanError
from product_clean.gemini_client import GeminiEditClient
from product_clean.log import setup_logging
from product_clean.payload import load_upload
from product_clean.quick_actions import QuickAction
from product_clean.session import EditSession, SessionSnapshot
from product_clean.status import Failed, InProgress


def slider_percentage(value: str) -> float:
    """argparse type for ``--slider``: a finite number, clamped to 0-100."""

    try:
        return clamp(float(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number between 0 and 100, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-clean",
        description="Edit a product photo with Gemini from a plain-language instruction.",
    )
    parser.add_argument("image", nargs="?", type=Path, help="Product photo to edit.")

    instruction = parser.add_mutually_exclusive_group()
    instruction.add_argument("-p", "--prompt", help="Free-text editing instruction.")
    instruction.add_argument(
        "-a",
        "--action",
        choices=[action.slug for action in QuickAction],
        help="Use one of the canned quick actions instead of a prompt.",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to save the edited image (default: edited-product.png).",
    )
    parser.add_argument(
        "--comparison",
        type=Path,
        default=None,
        help="Also save a before/after comparison frame to this path.",
    )
    parser.add_argument(
        "--slider",
        type=slider_percentage,
        default=INITIAL_POSITION,
        help="Divider position for the comparison frame, in percent (default: 50).",
    )
    parser.add_argument("--list-actions", action="store_true", help="Show the quick actions and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def print_status(snapshot: SessionSnapshot) -> None:
    """Observer that mirrors status changes on the terminal."""

    status = snapshot.status
    if isinstance(status, InProgress):
        print(f"⏳ {status.message}")
    elif isinstance(status, Failed):
        print(f"❌ {status.message}", file=sys.stderr)


def print_actions() -> None:
    print("⚡ Quick actions:")
    for action in QuickAction:
        print(f"  - {action.slug:<18} {action.label:<18} {action.value}")


def run(args: argparse.Namespace, settings: Settings) -> int:
    if args.list_actions:
        print_actions()
        return 0

    if args.image is None:
        print("❌ Provide the product photo to edit.", file=sys.stderr)
        return 2

    instruction = args.prompt
    if args.action:
        instruction = QuickAction.from_slug(args.action).value
    if not instruction or not instruction.strip():
        print("❌ Provide an instruction with --prompt or --action.", file=sys.stderr)
        return 2

    session = EditSession(GeminiEditClient(settings), settings)
    session.set_original(load_upload(args.image))
    session.subscribe(print_status)

    print("🖼️ Original image:")
    print(f"  - {args.image}")
    print("📝 Instruction:")
    print(f"  - {instruction}")

    record = session.request_edit(instruction)
    session.close()
    if record is None:
        return 1

    output_path = session.export_edited(args.output)
    print("✅ Gemini returned the edited photo:")
    print(f"  - {output_path}")

    if args.comparison:
        comparison = render_comparison_payload(record.original, record.edited, args.slider)
        comparison_path = comparison.write_to(args.comparison)
        print("🔍 Before/after comparison:")
        print(f"  - {comparison_path}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry-point used by the ``product-clean`` script."""

    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return run(args, Settings.from_env())
    except ProductCleanError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
