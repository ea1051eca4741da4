class CheckoutError(Exception):
    """Raised when a checkout request cannot be started at all."""
