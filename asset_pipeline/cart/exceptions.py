class CartItemError(Exception):
    """Raised when a cart item payload cannot be turned into a CartItem."""
