"""
Error taxonomy for the learning-path pipeline.

Every error here is recovered inside the pipeline; none of them reach the caller:
- CapabilityError: text-completion call failed or returned unusable content
- RetrievalError: content store unavailable (treated as an empty candidate pool)
- PersistenceError: write to the persistence sink failed (logged only)

An explicit technique with zero matches is not an error; it is an empty pool.
"""


class LearningPathError(Exception):
    """Base class for pipeline errors."""


class CapabilityError(LearningPathError):
    """The external text-completion capability failed or its output was unusable."""

    def __init__(self, message: str, task_type: str = ""):
        super().__init__(message)
        self.task_type = task_type


class RetrievalError(LearningPathError):
    """The content store could not be searched."""


class PersistenceError(LearningPathError):
    """A record could not be written to the persistence sink."""
