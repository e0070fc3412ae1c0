"""
Exception hierarchy for pipeline failures.

Every error aborts the current run and leaves the orchestrator in the
FAILED state. Only the pre-run cleanup of intermediate storage is
allowed to swallow errors.
"""


class ParallaxerError(Exception):
    """Base class for all pipeline errors."""


class EngineLoadError(ParallaxerError):
    """A collaborator engine (codec or depth model) failed to initialize."""


class DecodeError(ParallaxerError):
    """Frame extraction exited with a non-zero code."""


class InferenceShapeError(ParallaxerError):
    """The depth model returned a buffer of unexpected length."""

    def __init__(self, actual: int, expected: int):
        super().__init__(f"Unexpected depth size: {actual}. Expected {expected}.")
        self.actual = actual
        self.expected = expected


class EncodeError(ParallaxerError):
    """Stacking/encoding the SBS video exited with a non-zero code."""


class FrameStoreError(ParallaxerError, OSError):
    """Reading or writing intermediate storage failed."""


class PipelineBusyError(ParallaxerError):
    """Another run is already in progress."""
