"""
Error taxonomy for the enrichment pipeline.

Only TotalDispatchFailure is meant to reach callers, and only when they ask
for it (DispatchOutcome.raise_for_total_failure). Everything else is raised
at a component seam and recovered by the stage that owns it.
"""


class EnrichmentError(Exception):
    """Base class for all pipeline errors."""


class MalformedLinkError(EnrichmentError):
    """A scraped link has no usable URL. Dropped by the classifier."""


class UnsupportedPlatformError(EnrichmentError):
    """No provider is registered for the requested platform tag."""
    def __init__(self, platform):
        self.platform = platform
        super().__init__(f"No provider registered for platform '{platform}'")


class ProviderFailure(EnrichmentError):
    """A provider lookup raised, returned garbage, or missed the deadline."""
    def __init__(self, platform, message, cause=None):
        self.platform = platform
        self.cause = cause
        super().__init__(f"{platform} provider failed: {message}")


class ShortLinkResolutionFailure(EnrichmentError):
    """A single short link could not be expanded to its canonical URL."""
    def __init__(self, url, message=''):
        self.url = url
        super().__init__(f"Could not resolve short link {url}" + (f": {message}" if message else ''))


class TotalDispatchFailure(EnrichmentError):
    """Every dispatched provider failed for this page."""
    def __init__(self, platforms):
        self.platforms = list(platforms)
        super().__init__(f"All dispatched providers failed: {', '.join(self.platforms)}")
