"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ProductException(DomainException):
    """Base exception for product-related errors."""

    pass


class ProductNotFoundError(ProductException):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class InvalidProductError(ProductException):
    """Raised when product data violates an entity invariant."""

    def __init__(self, message: str = "Invalid product"):
        super().__init__(message, code="INVALID_PRODUCT")
