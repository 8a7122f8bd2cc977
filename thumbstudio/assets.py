"""
Reference assets - the optional background / object / icon images that
anchor the generated thumbnail's visual identity.

Assets are held as encoded image bytes plus a MIME type. The store is
immutable: every change returns a new AssetStore.
"""

import base64
import binascii
import io
import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import InputInvalid

logger = logging.getLogger(__name__)

MIME_TYPES = {
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "bmp": "image/bmp",
}


class AssetRole(str, Enum):
    BACKGROUND = "background"
    OBJECT = "object"
    ICON = "icon"


@dataclass(frozen=True)
class ReferenceAsset:
    role: AssetRole
    data: bytes
    mime_type: str
    source: str = ""


def parse_role(value) -> AssetRole:
    if isinstance(value, AssetRole):
        return value
    try:
        return AssetRole(str(value).strip().lower())
    except ValueError:
        roles = ", ".join(r.value for r in AssetRole)
        raise InputInvalid(f"Unknown asset role '{value}' (expected one of: {roles})")


def detect_mime_type(data: bytes) -> str:
    """Identify an encoded image and return its MIME type."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            image_format = (img.format or "").lower()
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InputInvalid(f"Not an image: {e}")
    return MIME_TYPES.get(image_format, f"image/{image_format or 'png'}")


def load_asset(role, path: Path) -> ReferenceAsset:
    """Read an image file from disk into a ReferenceAsset."""
    role = parse_role(role)
    path = Path(path)
    if not path.is_file():
        raise InputInvalid(f"Asset file not found: {path}")
    data = path.read_bytes()
    mime_type = detect_mime_type(data)
    logger.info("Loaded %s asset %s (%s, %d bytes)", role.value, path.name, mime_type, len(data))
    return ReferenceAsset(role, data, mime_type, source=path.name)


def decode_data_url(url: str) -> Tuple[bytes, str]:
    """Split a `data:<mime>;base64,<payload>` URL into (bytes, mime)."""
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise InputInvalid("Expected a base64 data URL")
    mime_type = header[len("data:"):].split(";", 1)[0] or "application/octet-stream"
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except (binascii.Error, ValueError) as e:
        raise InputInvalid(f"Invalid base64 payload: {e}")


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def asset_from_data_url(role, url: str) -> ReferenceAsset:
    data, _ = decode_data_url(url)
    return ReferenceAsset(parse_role(role), data, detect_mime_type(data), source="data-url")


@dataclass(frozen=True)
class AssetStore:
    """Up to three reference images, one per role."""

    background: Optional[ReferenceAsset] = None
    object: Optional[ReferenceAsset] = None
    icon: Optional[ReferenceAsset] = None

    def get(self, role) -> Optional[ReferenceAsset]:
        return getattr(self, parse_role(role).value)

    def with_asset(self, asset: ReferenceAsset) -> "AssetStore":
        return replace(self, **{asset.role.value: asset})

    def without(self, role) -> "AssetStore":
        return replace(self, **{parse_role(role).value: None})

    def items(self) -> Iterator[ReferenceAsset]:
        """Present assets in prompt order: background, object, icon."""
        for role in AssetRole:
            asset = getattr(self, role.value)
            if asset is not None:
                yield asset

    @property
    def count(self) -> int:
        return sum(1 for _ in self.items())
