"""
Generation client - Gemini wrapper that turns a topic into a thumbnail
image plus a hook phrase, and applies free-text visual edits to an
existing image.

Two models are involved:
  - text model:  suggests the 1-4 word hook
  - image model: generates / edits the 16:9 image, optionally anchored on
                 up to three reference assets (background, object, icon)

Calls are made once; there are no automatic retries and no local timeout.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from google import genai
from google.genai import types

from ..assets import AssetRole, AssetStore
from ..config import GEMINI_API_KEY, HOOK_MODEL, IMAGE_MODEL
from ..errors import EditFailed, GenerationFailed
from ..niches import NICHE_STYLES, Niche, suggest_font

logger = logging.getLogger(__name__)

MAX_HOOK_WORDS = 4
FALLBACK_HOOK = "UNBELIEVABLE"
HOOK_TEMPERATURE = 0.8
ASPECT_RATIO = "16:9"


@dataclass(frozen=True)
class GeneratedImage:
    data: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class GenerationResult:
    image: GeneratedImage
    hook: str
    font: str


class GenerationClient(Protocol):
    async def generate(self, topic: str, niche: Niche, assets: AssetStore) -> GenerationResult:
        ...

    async def edit(self, image: GeneratedImage, instruction: str) -> GeneratedImage:
        ...


# ── Prompts ───────────────────────────────────────────────────────────

HOOK_PROMPT = (
    'Video Title: "{title}"\n'
    "Niche: {niche}\n"
    'Suggest a extremely short, high-impact 1-4 word "Hook" text for a YouTube thumbnail. '
    "It must be curiosity-driven and represent the core intent. "
    "Ensure the words have clear semantic spacing. "
    "Return ONLY the 1-4 words. No quotes."
)

ASSET_LABELS = {
    AssetRole.BACKGROUND: "REFERENCE BACKGROUND: Use this exact image as the environment/backdrop.",
    AssetRole.OBJECT: "REFERENCE MAIN OBJECT: Use this exact image as the primary focal subject.",
    AssetRole.ICON: "REFERENCE ICON: Use this exact image as a small branding or highlight overlay.",
}

COMMON_RULES = (
    "YouTube Thumbnail Style: Professional 16:9 cinematic imagery.\n"
    "ABSOLUTE RULES:\n"
    "- NO HUMAN FACES OR HUMAN FIGURES.\n"
    "- NO TEXT, NO LOGOS, NO WATERMARKS, NO BRANDING, NO OVERLAYS.\n"
    "- High contrast, vibrant colors, dramatic lighting (chiaroscuro), depth of field.\n"
    '- The image must HONESTLY represent the topic: "{title}".'
)

ASSET_RULES = (
    "ASSET INTEGRATION RULES:\n"
    "1. If a REFERENCE BACKGROUND is provided, use its EXACT composition and textures as the environment.\n"
    "2. If a REFERENCE MAIN OBJECT is provided, it MUST be the central hero of the thumbnail. Do not swap it.\n"
    "3. If a REFERENCE ICON is provided, place it strategically as a complementary visual highlight.\n"
    "- MAINTAIN THE IDENTITY OF ALL PROVIDED ASSETS. NO HALLUCINATIONS.\n"
    "- Only apply cinematic lighting, color grading, shadows, and glow effects to blend them perfectly."
)

SUBJECT_RULE = 'GENERATE SUBJECT: Create one high-impact central subject that represents "{title}" cinematically.'

EDIT_PROMPT = (
    "You are editing this YouTube thumbnail.\n"
    'USER REQUEST: "{instruction}"\n\n'
    "ABSOLUTE RULES:\n"
    "- MAINTAIN THE EXACT IDENTITY AND CONTENT OF THE ORIGINAL IMAGE.\n"
    "- DO NOT ADD HUMANS OR HUMAN FACES.\n"
    "- ONLY apply the requested changes (e.g., lighting, color, adding specific effects "
    "like glow, haze, or small environmental details).\n"
    "- DO NOT add text, logos, or watermarks.\n"
    "- The result must be 16:9 aspect ratio."
)


def build_hook_prompt(title: str, niche: Niche) -> str:
    return HOOK_PROMPT.format(title=title, niche=niche.value)


def build_visual_prompt(title: str, niche: Niche, assets: AssetStore) -> str:
    """Closing text part of the image request."""
    common = COMMON_RULES.format(title=title)
    guidance = ASSET_RULES if assets.count else SUBJECT_RULE.format(title=title)
    return f"{common}\n{guidance}\n{NICHE_STYLES[niche]}"


def build_edit_prompt(instruction: str) -> str:
    return EDIT_PROMPT.format(instruction=instruction)


def truncate_hook(text: Optional[str]) -> str:
    """Keep at most four words; an empty suggestion falls back to a stock hook."""
    words = (text or "").strip().split()[:MAX_HOOK_WORDS]
    return " ".join(words) or FALLBACK_HOOK


def first_image(response) -> Optional[GeneratedImage]:
    """Return the first inline image part of a Gemini response, if any."""
    for part in getattr(response, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and inline.data:
            return GeneratedImage(bytes(inline.data), inline.mime_type or "image/png")
    return None


# ── Client ────────────────────────────────────────────────────────────

class GeminiGenerationClient:
    """GenerationClient backed by the google-genai async API."""

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        api_key: Optional[str] = None,
        hook_model: str = HOOK_MODEL,
        image_model: str = IMAGE_MODEL,
    ):
        if client is None:
            key = api_key or GEMINI_API_KEY
            if not key:
                raise ValueError("GEMINI_API_KEY not found in .env")
            client = genai.Client(api_key=key)
        self.client = client
        self.hook_model = hook_model
        self.image_model = image_model

    async def suggest_hook(self, topic: str, niche: Niche) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.hook_model,
            contents=build_hook_prompt(topic, niche),
            config=types.GenerateContentConfig(temperature=HOOK_TEMPERATURE),
        )
        return truncate_hook(response.text)

    async def generate(self, topic: str, niche: Niche, assets: AssetStore) -> GenerationResult:
        hook = await self.suggest_hook(topic, niche)
        logger.info("Hook suggested: %r", hook)

        parts: List[types.Part] = []
        for asset in assets.items():
            parts.append(types.Part.from_text(text=ASSET_LABELS[asset.role]))
            parts.append(types.Part.from_bytes(data=asset.data, mime_type=asset.mime_type))
        parts.append(types.Part.from_text(text=build_visual_prompt(topic, niche, assets)))

        logger.info("Generating image (%s, %d reference asset(s))", niche.value, assets.count)
        response = await self.client.aio.models.generate_content(
            model=self.image_model,
            contents=parts,
            config=_image_config(),
        )
        image = first_image(response)
        if image is None:
            raise GenerationFailed("Failed to generate thumbnail image.")

        font = suggest_font(niche, topic)
        logger.info("Image generated (%d bytes), font=%s", len(image.data), font)
        return GenerationResult(image=image, hook=hook, font=font)

    async def edit(self, image: GeneratedImage, instruction: str) -> GeneratedImage:
        parts = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            types.Part.from_text(text=build_edit_prompt(instruction)),
        ]
        logger.info("Editing image: %s", instruction[:100])
        response = await self.client.aio.models.generate_content(
            model=self.image_model,
            contents=parts,
            config=_image_config(),
        )
        edited = first_image(response)
        if edited is None:
            raise EditFailed("Failed to edit thumbnail.")
        return edited


def _image_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_modalities=["IMAGE"],
        image_config=types.ImageConfig(aspect_ratio=ASPECT_RATIO),
    )
