"""Failures raised inside the core. Public coordinator operations convert them to None/False."""


class JukeyError(Exception):
    """Base class for jukey failures."""


class NotFound(JukeyError):
    """Identifier is not in the catalog."""

    def __init__(self, playable_id: str) -> None:
        super().__init__(f"Unknown id {playable_id!r}")
        self.playable_id = playable_id


class SearchFailure(JukeyError):
    """Catalog search against the provider failed."""


class ExpansionFailure(JukeyError):
    """Album or playlist members could not be fetched from the provider."""


class ControlSurfaceFailure(JukeyError):
    """A player command failed, was rejected, or timed out."""


class ProviderNotConfigured(JukeyError):
    """Catalog provider has no credentials."""
