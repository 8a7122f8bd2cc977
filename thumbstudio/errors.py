"""Error taxonomy for the thumbnail studio."""


class ThumbnailStudioError(Exception):
    """Base class for every studio failure."""


class InputInvalid(ThumbnailStudioError):
    """User input rejected before any remote call or render."""


class GenerationClientError(ThumbnailStudioError):
    pass


class GenerationFailed(GenerationClientError):
    """The generation call returned no usable image."""


class EditFailed(GenerationClientError):
    """The edit call returned no usable image."""


class CompositionError(ThumbnailStudioError):
    """Local compositing failure; the export is aborted."""


class RenderUnavailable(CompositionError):
    """The drawing surface could not be created."""


class ImageLoadError(CompositionError):
    """The source image buffer could not be decoded."""
