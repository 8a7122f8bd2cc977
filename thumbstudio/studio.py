"""
Studio - the state controller behind every front-end.

The current state is one frozen StudioState; each transition replaces it
wholesale. Failures never escape an operation: they are turned into the
state's `error` message, the fields the operation owns keep their pre-call
values and its busy flag is always released.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from .assets import AssetStore, ReferenceAsset
from .errors import CompositionError, InputInvalid
from .niches import DEFAULT_NICHE, Niche, parse_niche
from .thumbnail_engine import compositor
from .thumbnail_engine.compositor import RenderSpec
from .thumbnail_engine.fonts import DEFAULT_FONT, FONTS
from .thumbnail_engine.generator import GeneratedImage, GenerationClient

logger = logging.getLogger(__name__)

EMPTY_TOPIC_MESSAGE = "Please enter a video title first."
GENERATE_FAILED_MESSAGE = "Failed to generate thumbnail."
EDIT_FAILED_MESSAGE = "Failed to apply visual edits."
EXPORT_FAILED_MESSAGE = "Export failed. Please try again."
NOTHING_TO_EXPORT_MESSAGE = "Generate a thumbnail first."


@dataclass(frozen=True)
class StudioState:
    topic: str = ""
    niche: Niche = DEFAULT_NICHE
    assets: AssetStore = field(default_factory=AssetStore)
    image: Optional[GeneratedImage] = None
    hook: str = ""
    font: str = DEFAULT_FONT
    error: Optional[str] = None
    is_generating: bool = False
    is_editing: bool = False
    is_exporting: bool = False

    @property
    def is_busy(self) -> bool:
        return self.is_generating or self.is_editing or self.is_exporting


class Studio:
    def __init__(self, client: GenerationClient, output_dir: Optional[Path] = None,
                 state: Optional[StudioState] = None):
        self.client = client
        self.output_dir = output_dir
        self.state = state or StudioState()

    # ── Form controls ─────────────────────────────────────────────────

    def set_topic(self, topic: str) -> StudioState:
        self.state = replace(self.state, topic=topic)
        return self.state

    def set_niche(self, niche) -> StudioState:
        self.state = replace(self.state, niche=parse_niche(niche))
        return self.state

    def set_asset(self, asset: ReferenceAsset) -> StudioState:
        self.state = replace(self.state, assets=self.state.assets.with_asset(asset))
        return self.state

    def clear_asset(self, role) -> StudioState:
        self.state = replace(self.state, assets=self.state.assets.without(role))
        return self.state

    def set_hook(self, hook: str) -> StudioState:
        self.state = replace(self.state, hook=hook)
        return self.state

    def set_font(self, font: str) -> StudioState:
        if font not in FONTS:
            raise InputInvalid(f"Unknown font '{font}' (expected one of: {', '.join(FONTS)})")
        self.state = replace(self.state, font=font)
        return self.state

    # ── Remote actions ────────────────────────────────────────────────

    async def generate(self) -> StudioState:
        """Generate a fresh image, hook and font for the current topic."""
        if self.state.is_generating:
            logger.warning("Generate ignored: a generation is already in flight")
            return self.state
        if not self.state.topic.strip():
            self.state = replace(self.state, error=EMPTY_TOPIC_MESSAGE)
            return self.state

        request = self.state
        self.state = replace(request, is_generating=True, error=None)
        try:
            result = await self.client.generate(request.topic, request.niche, request.assets)
        except Exception as e:
            logger.error("Generation failed: %s", e)
            self.state = replace(self.state, error=str(e) or GENERATE_FAILED_MESSAGE)
        else:
            self.state = replace(self.state, image=result.image, hook=result.hook, font=result.font)
        finally:
            self.state = replace(self.state, is_generating=False)
        return self.state

    async def edit(self, instruction: str) -> StudioState:
        """Apply a free-text visual edit to the current image."""
        if not instruction.strip() or self.state.image is None:
            return self.state
        if self.state.is_editing:
            logger.warning("Edit ignored: an edit is already in flight")
            return self.state

        source = self.state.image
        self.state = replace(self.state, is_editing=True, error=None)
        try:
            edited = await self.client.edit(source, instruction)
        except Exception as e:
            logger.error("Edit failed: %s", e)
            self.state = replace(self.state, error=str(e) or EDIT_FAILED_MESSAGE)
        else:
            self.state = replace(self.state, image=edited)
        finally:
            self.state = replace(self.state, is_editing=False)
        return self.state

    # ── Export ────────────────────────────────────────────────────────

    def render_spec(self) -> Optional[RenderSpec]:
        if self.state.image is None:
            return None
        return RenderSpec(image=self.state.image.data, hook_text=self.state.hook, font=self.state.font)

    def export(self, output_dir: Optional[Path] = None) -> Optional[Path]:
        """Write the composed PNG. Returns None when nothing was written."""
        if self.state.is_exporting:
            logger.warning("Export ignored: an export is already in flight")
            return None
        spec = self.render_spec()
        if spec is None:
            self.state = replace(self.state, error=NOTHING_TO_EXPORT_MESSAGE)
            return None

        path = None
        self.state = replace(self.state, is_exporting=True)
        try:
            path = compositor.export(spec, output_dir or self.output_dir)
        except (CompositionError, OSError) as e:
            logger.error("Export failed: %s", e)
            self.state = replace(self.state, error=EXPORT_FAILED_MESSAGE)
        finally:
            self.state = replace(self.state, is_exporting=False)
        return path
