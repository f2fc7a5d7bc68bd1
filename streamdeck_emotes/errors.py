"""Exception hierarchy for Stream Deck emote profile generation."""

from __future__ import annotations


class ProfileGenerationError(RuntimeError):
    """Base class for every failure raised by the generator."""


class UnknownModelError(ProfileGenerationError, ValueError):
    """Raised when a device model tag is not one of the supported panels."""


class EmoteParseError(ProfileGenerationError):
    """Raised when the emote list cannot be extracted from channel HTML."""


class FetchError(ProfileGenerationError):
    """Raised once every download finished and at least one of them failed."""

    def __init__(self, message: str, failures=None) -> None:
        super().__init__(message)
        self.failures = list(failures or [])


class MalformedManifestError(ProfileGenerationError):
    """Raised when a persisted manifest has no usable ``Actions`` mapping."""


class ManifestWriteError(ProfileGenerationError):
    """Raised when a profile directory, manifest or image cannot be written."""
