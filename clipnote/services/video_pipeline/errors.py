class VideoPipelineError(RuntimeError):
    """Base class for video pipeline failures."""


class ProviderUnavailable(VideoPipelineError):
    """Metadata or transcript provider could not be reached or answered with an error."""


class NoTranscriptAvailable(VideoPipelineError):
    """The transcript provider returned no entries for the video."""


class EmptyTranscriptError(VideoPipelineError):
    """Normalization was asked to process an empty entry sequence."""


class NoCurrentUser(VideoPipelineError):
    """No acting user could be resolved for the request."""
