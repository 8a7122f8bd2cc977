"""
Studio configuration, read once from the environment / .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"
FONTS_DIR = Path(os.getenv("THUMBSTUDIO_FONTS_DIR", DATA_DIR / "fonts"))
OUTPUT_DIR = Path(os.getenv("THUMBSTUDIO_OUTPUT_DIR", DATA_DIR / "output"))

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
HOOK_MODEL = os.getenv("THUMBSTUDIO_HOOK_MODEL", "gemini-3-flash-preview")
IMAGE_MODEL = os.getenv("THUMBSTUDIO_IMAGE_MODEL", "gemini-2.5-flash-image")

# Export
EXPORT_PREFIX = os.getenv("THUMBSTUDIO_EXPORT_PREFIX", "yt-thumbnail")
