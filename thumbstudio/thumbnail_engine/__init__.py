"""
Thumbnail engine - generation and compositing for 16:9 YouTube thumbnails.

Modules:
  fonts       - Hook font table (render names, font files, word gaps)
  layout      - Pure hook text layout math (sizing, spacing, centering)
  compositor  - Image + gradient + shadowed text compositing and PNG export
  generator   - Gemini API client for image generation, hooks and edits
"""
