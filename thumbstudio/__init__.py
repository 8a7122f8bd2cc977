"""Thumbnail studio: AI-generated 16:9 thumbnails with hook text overlay."""
