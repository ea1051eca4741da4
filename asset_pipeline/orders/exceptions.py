class OrderSubmissionError(Exception):
    """Raised when the order service cannot accept the order."""
