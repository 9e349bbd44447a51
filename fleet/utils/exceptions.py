from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES: machine-readable constants for frontend switch/case
# ═══════════════════════════════════════════════════════════════════════════════
class ErrorCode:
    VALIDATION_ERROR        = "VALIDATION_ERROR"
    UNAUTHORIZED            = "UNAUTHORIZED"
    TOKEN_EXPIRED           = "TOKEN_EXPIRED"
    FORBIDDEN               = "FORBIDDEN"
    NOT_FOUND               = "NOT_FOUND"
    DUPLICATE_ENTRY         = "DUPLICATE_ENTRY"
    INVALID_TRANSITION      = "INVALID_TRANSITION"
    INSUFFICIENT_BALANCE    = "INSUFFICIENT_BALANCE"
    BALANCE_CHANGED         = "BALANCE_CHANGED"
    BACKEND_UNAVAILABLE     = "BACKEND_UNAVAILABLE"
    ACCOUNT_INACTIVE        = "ACCOUNT_INACTIVE"
    INTERNAL_SERVER_ERROR   = "INTERNAL_SERVER_ERROR"


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    Carries a machine-readable error_code for frontend handling.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: list | None = None,
        field: str | None = None,
    ):
        self.message = message
        self.error_code = error_code
        super().__init__(status_code=status_code, detail={
            "message": message,
            "error": {
                "code": error_code,
                "details": details,
                "field": field,
            }
        })


# ═══════════════════════════════════════════════════════════════════════════════
# CONCRETE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class UnauthorizedException(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, ErrorCode.UNAUTHORIZED)


class TokenExpiredException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Access token has expired", ErrorCode.TOKEN_EXPIRED)


class ForbiddenException(AppException):
    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(status.HTTP_403_FORBIDDEN, message, ErrorCode.FORBIDDEN)


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", ErrorCode.NOT_FOUND)


class DuplicateEntryException(AppException):
    def __init__(self, message: str = "Record already exists", field: str | None = None):
        super().__init__(status.HTTP_409_CONFLICT, message, ErrorCode.DUPLICATE_ENTRY, field=field)


class AccountInactiveException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_403_FORBIDDEN,
            "Your account has been deactivated. Contact admin.",
            ErrorCode.ACCOUNT_INACTIVE,
        )


# ─── Validation (checked before any write) ────────────────────────────────────
class ValidationFailedException(AppException):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            message,
            ErrorCode.VALIDATION_ERROR,
            details=[{"field": field, "message": message}] if field else None,
            field=field,
        )


# ─── State transitions & business rules ───────────────────────────────────────
class InvalidTransitionException(AppException):
    def __init__(self, message: str):
        super().__init__(status.HTTP_409_CONFLICT, message, ErrorCode.INVALID_TRANSITION)


class InsufficientBalanceException(AppException):
    def __init__(self, balance: float, required: float):
        super().__init__(
            status.HTTP_409_CONFLICT,
            f"Insufficient bulk account balance: {balance:.2f} available, {required:.2f} required",
            ErrorCode.INSUFFICIENT_BALANCE,
        )


class BalanceChangedException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_409_CONFLICT,
            "Bulk account balance changed, please retry",
            ErrorCode.BALANCE_CHANGED,
            details=[{"retryable": True}],
        )


# ─── Backend availability ─────────────────────────────────────────────────────
class BackendUnavailableException(AppException):
    def __init__(self, message: str = "Remote data service is unavailable"):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, message, ErrorCode.BACKEND_UNAVAILABLE)
