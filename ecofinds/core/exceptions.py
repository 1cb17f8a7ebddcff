# ecofinds/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Standardized error codes for the marketplace API."""

    # Input validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    UNKNOWN_CATEGORY = "UNKNOWN_CATEGORY"
    INVALID_QUANTITY = "INVALID_QUANTITY"

    # Authentication / authorization errors
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # Checkout errors
    EMPTY_CART = "EMPTY_CART"
    CART_CHANGED = "CART_CHANGED"

    # System errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


class MarketplaceError(Exception):
    """Base exception for all marketplace application errors."""

    status_code: int = 400
    default_code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        user_message: str,
        code: Optional[ErrorCode] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.code = code or self.default_code
        self.user_message = user_message
        self.context = context or {}

        logger.debug(
            f"Marketplace error raised: {self.code.value}",
            extra={"error_code": self.code.value, "context": self.context},
        )

        super().__init__(self.user_message)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        response = {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
            }
        }
        if self.context:
            response["error"]["context"] = self.context
        return response


class ValidationError(MarketplaceError):
    """Malformed or missing input."""

    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR


class UnauthenticatedError(MarketplaceError):
    """No session, or the session's user no longer exists."""

    status_code = 401
    default_code = ErrorCode.UNAUTHENTICATED

    def __init__(self, user_message: str = "Authentication required"):
        super().__init__(user_message)


class InvalidCredentialsError(MarketplaceError):
    """Login failure. The message never says which half of the credentials was wrong."""

    status_code = 401
    default_code = ErrorCode.INVALID_CREDENTIALS

    def __init__(self):
        super().__init__("Invalid email or password")


class ForbiddenError(MarketplaceError):
    """Authenticated, but not allowed to touch the resource."""

    status_code = 403
    default_code = ErrorCode.FORBIDDEN


class NotFoundError(MarketplaceError):
    status_code = 404
    default_code = ErrorCode.NOT_FOUND

    def __init__(self, resource: str, identifier: Any = None):
        context = {"resource": resource}
        if identifier is not None:
            context["id"] = str(identifier)
        super().__init__(f"{resource} not found", context=context)


class EmptyCartError(MarketplaceError):
    status_code = 400
    default_code = ErrorCode.EMPTY_CART

    def __init__(self):
        super().__init__("Cart is empty")
