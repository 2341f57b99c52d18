from fastapi import HTTPException, status
from typing import Optional, Dict, Any

class BaseAPIException(HTTPException):
    """Base exception for API errors

    응답 본문은 항상 ``{"error": message, "code": error_code, **details}`` 형태입니다.
    """
    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={
                **self.details,
                "error": message,
                "code": error_code,
            }
        )

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message

class AuthenticationError(BaseAPIException):
    """Authentication related errors"""
    def __init__(self, message: str = "Not authenticated", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="AUTH_001",
            message=message,
            details=details
        )

class AuthorizationError(BaseAPIException):
    """Authorization related errors"""
    def __init__(self, message: str = "Access forbidden", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="AUTH_002",
            message=message,
            details=details
        )

class ValidationError(BaseAPIException):
    """Validation errors"""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_001",
            message=message,
            details=details
        )

class BusinessLogicError(BaseAPIException):
    """Business logic errors"""
    def __init__(self, error_code: str, message: str, details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            message=message,
            details=details
        )

class NotFoundError(BaseAPIException):
    """Resource not found errors"""
    def __init__(self, message: str = "Resource not found", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND_001",
            message=message,
            details=details
        )

class PlayerNotFoundError(BaseAPIException):
    """Player account has not been provisioned"""
    def __init__(self, player_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="PLAYER_001",
            message="Player not found",
            details={"playerId": player_id}
        )

class ConflictError(BaseAPIException):
    """Resource conflict errors"""
    def __init__(self, message: str = "Resource conflict", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code="CONFLICT_001",
            message=message,
            details=details
        )

class SessionAlreadyActiveError(BaseAPIException):
    """A player already has an ACTIVE session of this game"""
    def __init__(self, seed: int):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code="GAME_001",
            message="You already have an active game. Complete it first.",
            details={"seed": seed}
        )

class GameNotActiveError(BaseAPIException):
    """Action on a session that already reached a terminal state"""
    def __init__(self, message: str = "Game is no longer active"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="GAME_002",
            message=message,
        )

class SelfChallengeError(BaseAPIException):
    """Coinflip initiator tried to accept their own challenge"""
    def __init__(self, message: str = "You cannot play against yourself"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code="COINFLIP_001",
            message=message,
        )

class ChallengeClosedError(BaseAPIException):
    """Coinflip challenge was already accepted or cancelled"""
    def __init__(self, message: str = "Challenge is no longer open"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code="COINFLIP_002",
            message=message,
        )

class InternalServerError(BaseAPIException):
    """Internal server errors"""
    def __init__(self, message: str = "Internal server error", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="INTERNAL_001",
            message=message,
            details=details
        )

class InsufficientBalanceError(BaseAPIException):
    """Insufficient balance errors"""
    def __init__(self, required: int, current: int, message: str = "Insufficient ZVC balance"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="BALANCE_001",
            message=message,
            details={"required": required, "current": current}
        )
