#!/usr/bin/env python3
"""
Generate a YouTube thumbnail from a topic in one go.

Usage:
    python generate_thumbnail.py "The Secret History of AI"
    python generate_thumbnail.py "Best Setup 2024" --category gaming --hook "INSANE SETUP"
    python generate_thumbnail.py "Compound Interest" -c finance --object data/coin.png
    python generate_thumbnail.py "Black Holes" --edit "Add purple mist" --edit "More glow"

Configuration: .env (GEMINI_API_KEY, THUMBSTUDIO_* overrides)
Fonts: drop the TTFs into data/fonts/ (BebasNeue-Regular.ttf, Anton-Regular.ttf,
       Cinzel-Black.ttf, SpaceMono-Bold.ttf, Inter-Black.ttf)
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from thumbstudio.assets import AssetRole, load_asset
from thumbstudio.errors import ThumbnailStudioError
from thumbstudio.niches import Niche
from thumbstudio.studio import Studio
from thumbstudio.thumbnail_engine.fonts import FONTS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a 1280x720 YouTube thumbnail with an AI image and hook text"
    )
    parser.add_argument("topic", help="What the video is about")
    parser.add_argument(
        "--category", "-c",
        default=Niche.MYSTERY.name.lower(),
        help="Video category: " + ", ".join(n.name.lower() for n in Niche),
    )
    for role in AssetRole:
        parser.add_argument(
            f"--{role.value}",
            type=Path,
            default=None,
            help=f"Reference {role.value} image",
        )
    parser.add_argument("--hook", default=None, help="Override the suggested hook text")
    parser.add_argument("--font", choices=list(FONTS), default=None, help="Override the suggested font")
    parser.add_argument(
        "--edit", "-e",
        action="append",
        default=[],
        help="Visual refinement applied after generation (repeatable)",
    )
    parser.add_argument("--output-dir", "-o", type=Path, default=None, help="Output directory")
    return parser


async def run(args: argparse.Namespace, studio: Studio) -> Path | None:
    studio.set_topic(args.topic)
    studio.set_niche(args.category)
    for role in AssetRole:
        path = getattr(args, role.value)
        if path is not None:
            studio.set_asset(load_asset(role, path))

    print(f"  Topic: {args.topic}")
    print(f"  Category: {studio.state.niche.value}")
    print(f"  Reference assets: {studio.state.assets.count}")

    state = await studio.generate()
    if state.error:
        print(f"  ERROR: {state.error}")
        return None
    print(f"  Hook: \"{state.hook}\"  Font: {state.font}")

    for instruction in args.edit:
        print(f"  Editing: {instruction}")
        state = await studio.edit(instruction)
        if state.error:
            print(f"  ERROR: {state.error}")
            return None

    if args.hook is not None:
        studio.set_hook(args.hook)
    if args.font is not None:
        studio.set_font(args.font)

    path = studio.export(args.output_dir)
    if path is None:
        print(f"  ERROR: {studio.state.error}")
        return None
    print(f"  Saved: {path}")
    return path


def main():
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        level=logging.INFO,
    )
    args = build_parser().parse_args()

    from thumbstudio.thumbnail_engine.generator import GeminiGenerationClient

    try:
        studio = Studio(GeminiGenerationClient(), output_dir=args.output_dir)
        path = asyncio.run(run(args, studio))
    except (ThumbnailStudioError, ValueError) as e:
        print(f"  ERROR: {e}")
        sys.exit(1)

    if path is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
