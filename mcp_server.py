#!/usr/bin/env python3
"""
Thumbnail Studio - MCP Server
=============================
Model Context Protocol server exposing the thumbnail studio controls as
MCP tools. One studio session lives for the lifetime of the server.

Tools:
  - studio_status: Current topic, category, assets, hook, font and errors
  - list_options: Available categories, fonts and asset roles
  - set_topic: Set the video topic and (optionally) the category
  - upload_asset: Attach a reference image (background / object / icon)
  - clear_asset: Remove a reference image
  - generate_thumbnail: Generate image + hook + font with Gemini
  - edit_thumbnail: Apply a free-text visual edit to the generated image
  - set_hook: Adjust the hook text (1-4 words)
  - set_font: Change the hook font
  - export_thumbnail: Render the 1280x720 PNG with the hook overlay

Run: python mcp_server.py
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

# MCP SDK imports
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from thumbstudio.assets import AssetRole, asset_from_data_url, load_asset
from thumbstudio.niches import Niche
from thumbstudio.studio import Studio
from thumbstudio.thumbnail_engine.fonts import FONTS

logger = logging.getLogger("thumbstudio.mcp")


# ─── Tools ────────────────────────────────────────────────────────────

CATEGORY_NAMES = [n.value for n in Niche]
FONT_KEYS = list(FONTS)
ROLE_NAMES = [r.value for r in AssetRole]

TOOLS = [
    Tool(
        name="studio_status",
        description=(
            "Show the current studio state: topic, category, reference assets, "
            "whether an image exists, hook text, font and the last error. "
            "CALL THIS FIRST to understand the session."
        ),
        inputSchema={"type": "object", "properties": {}, "required": []},
    ),
    Tool(
        name="list_options",
        description="List the available categories, hook fonts (with word gaps) and asset roles.",
        inputSchema={"type": "object", "properties": {}, "required": []},
    ),
    Tool(
        name="set_topic",
        description="Set what the video is about and, optionally, its category.",
        inputSchema={
            "type": "object",
            "properties": {
                "topic": {"type": "string", "description": "Video topic / content goal"},
                "category": {
                    "type": "string",
                    "description": "Video category",
                    "enum": CATEGORY_NAMES,
                },
            },
            "required": ["topic"],
        },
    ),
    Tool(
        name="upload_asset",
        description=(
            "Attach a reference image that the generated thumbnail must preserve. "
            "Provide either a local file path or a base64 data URL."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "role": {"type": "string", "enum": ROLE_NAMES},
                "path": {"type": "string", "description": "Local image file path"},
                "data_url": {"type": "string", "description": "data:image/...;base64,... URL"},
            },
            "required": ["role"],
        },
    ),
    Tool(
        name="clear_asset",
        description="Remove a reference image.",
        inputSchema={
            "type": "object",
            "properties": {"role": {"type": "string", "enum": ROLE_NAMES}},
            "required": ["role"],
        },
    ),
    Tool(
        name="generate_thumbnail",
        description=(
            "Generate a new 16:9 thumbnail image, a 1-4 word hook and a suggested font "
            "from the current topic, category and reference assets. Replaces any previous image."
        ),
        inputSchema={"type": "object", "properties": {}, "required": []},
    ),
    Tool(
        name="edit_thumbnail",
        description=(
            "Refine the generated image with a visual instruction "
            "(e.g. 'Add purple mist', 'More glow'). Subject identity is preserved."
        ),
        inputSchema={
            "type": "object",
            "properties": {"instruction": {"type": "string"}},
            "required": ["instruction"],
        },
    ),
    Tool(
        name="set_hook",
        description="Adjust the hook text overlaid on the thumbnail (1-4 words recommended).",
        inputSchema={
            "type": "object",
            "properties": {"hook": {"type": "string"}},
            "required": ["hook"],
        },
    ),
    Tool(
        name="set_font",
        description="Change the hook font style.",
        inputSchema={
            "type": "object",
            "properties": {"font": {"type": "string", "enum": FONT_KEYS}},
            "required": ["font"],
        },
    ),
    Tool(
        name="export_thumbnail",
        description=(
            "Render the final 1280x720 PNG (image + gradient + hook text) and save it "
            "as yt-thumbnail-<timestamp>.png."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "output_dir": {"type": "string", "description": "Directory to write into (optional)"},
            },
            "required": [],
        },
    ),
]


def format_status(studio: Studio) -> str:
    s = studio.state
    lines = ["THUMBNAIL STUDIO STATUS:", ""]
    lines.append(f"Topic: {s.topic or '(not set)'}")
    lines.append(f"Category: {s.niche.value}")

    assets = list(s.assets.items())
    if assets:
        lines.append(f"Reference assets ({len(assets)}):")
        for a in assets:
            lines.append(f"  {a.role.value}: {a.source or '?'} [{a.mime_type}, {len(a.data)} bytes]")
    else:
        lines.append("Reference assets: none")

    if s.image is not None:
        lines.append(f"\nImage: generated [{s.image.mime_type}, {len(s.image.data)} bytes]")
        lines.append(f"Hook: \"{s.hook}\"")
        lines.append(f"Font: {s.font}")
    else:
        lines.append("\nNo image yet. Use generate_thumbnail.")

    busy = [flag for flag in ("is_generating", "is_editing", "is_exporting") if getattr(s, flag)]
    if busy:
        lines.append(f"Busy: {', '.join(busy)}")
    if s.error:
        lines.append(f"\nLast error: {s.error}")
    return "\n".join(lines)


def _blocked(action: str) -> str:
    return f"🔒 BLOCKED: A {action} is already running. Wait and retry."


async def handle_tool(studio: Studio, name: str, args: dict[str, Any]) -> str:

    # ── studio_status ─────────────────────────────────────────────
    if name == "studio_status":
        return format_status(studio)

    # ── list_options ──────────────────────────────────────────────
    elif name == "list_options":
        lines = ["CATEGORIES:"]
        lines += [f"  {n.name}: {n.value}" for n in Niche]
        lines.append("\nFONTS:")
        lines += [f"  {f.key}: {f.render_name} (word gap {f.gap}px)" for f in FONTS.values()]
        lines.append("\nASSET ROLES: " + ", ".join(ROLE_NAMES))
        return "\n".join(lines)

    # ── set_topic ─────────────────────────────────────────────────
    elif name == "set_topic":
        topic = args.get("topic", "")
        if args.get("category"):
            studio.set_niche(args["category"])
        studio.set_topic(topic)
        return f"Topic set: {topic}\nCategory: {studio.state.niche.value}\n\nNext: upload_asset (optional) or generate_thumbnail."

    # ── upload_asset ──────────────────────────────────────────────
    elif name == "upload_asset":
        role = args.get("role", "")
        if args.get("path"):
            asset = load_asset(role, Path(args["path"]))
        elif args.get("data_url"):
            asset = asset_from_data_url(role, args["data_url"])
        else:
            return "ERROR: path or data_url is required"
        studio.set_asset(asset)
        return f"Asset loaded: {asset.role.value} ({asset.mime_type}, {len(asset.data)} bytes)"

    # ── clear_asset ───────────────────────────────────────────────
    elif name == "clear_asset":
        studio.clear_asset(args.get("role", ""))
        return f"Asset removed: {args.get('role')}"

    # ── generate_thumbnail ────────────────────────────────────────
    elif name == "generate_thumbnail":
        if studio.state.is_generating:
            return _blocked("generation")
        state = await studio.generate()
        if state.error:
            return f"ERROR: {state.error}"
        return (
            f"Thumbnail generated!\n"
            f"  Hook: \"{state.hook}\"\n"
            f"  Font: {state.font}\n\n"
            f"Next: edit_thumbnail to refine, set_hook / set_font to adjust, "
            f"or export_thumbnail to save the PNG."
        )

    # ── edit_thumbnail ────────────────────────────────────────────
    elif name == "edit_thumbnail":
        instruction = args.get("instruction", "")
        if not instruction.strip():
            return "ERROR: instruction is required"
        if studio.state.image is None:
            return "ERROR: No image yet. Use generate_thumbnail first."
        if studio.state.is_editing:
            return _blocked("edit")
        state = await studio.edit(instruction)
        if state.error:
            return f"ERROR: {state.error}"
        return f"Edit applied: {instruction}\n\nNext: export_thumbnail or another edit_thumbnail."

    # ── set_hook ──────────────────────────────────────────────────
    elif name == "set_hook":
        studio.set_hook(args.get("hook", ""))
        return f"Hook set: \"{studio.state.hook}\""

    # ── set_font ──────────────────────────────────────────────────
    elif name == "set_font":
        studio.set_font(args.get("font", ""))
        return f"Font set: {studio.state.font}"

    # ── export_thumbnail ──────────────────────────────────────────
    elif name == "export_thumbnail":
        if studio.state.is_exporting:
            return _blocked("export")
        output_dir = Path(args["output_dir"]) if args.get("output_dir") else None
        path = await asyncio.to_thread(studio.export, output_dir)
        if path is None:
            return f"ERROR: {studio.state.error}"
        return f"Thumbnail exported: {path}\nReady for YouTube upload!"

    else:
        return f"ERROR: Unknown tool '{name}'"


async def run_tool(studio: Studio, name: str, args: dict[str, Any]) -> str:
    """Run a tool, turning any failure into an ERROR line for the client."""
    try:
        return await handle_tool(studio, name, args or {})
    except Exception as e:
        logger.exception("Tool '%s' failed", name)
        return f"ERROR: {str(e)}"


# ─── MCP Server ───────────────────────────────────────────────────────

def create_app(studio: Studio) -> Server:
    app = Server("thumbnail-studio")

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        return TOOLS

    @app.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        result = await run_tool(studio, name, arguments)
        return [TextContent(type="text", text=result)]

    return app


# ─── Main ─────────────────────────────────────────────────────────────

async def main():
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        level=logging.INFO,
    )
    from thumbstudio.thumbnail_engine.generator import GeminiGenerationClient

    studio = Studio(GeminiGenerationClient())
    app = create_app(studio)
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
