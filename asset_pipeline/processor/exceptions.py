class ProcessorError(Exception):
    """Base exception for batch processing errors."""


class BatchInputError(ProcessorError):
    """Raised when the batch itself is malformed (not a per-item failure)."""
