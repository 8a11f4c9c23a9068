"""Fatal errors raised while rolling out a deployment."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class RolloutError(Exception):
    """Base exception for errors that abort the whole rollout."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = dict(details or {})
        self.timestamp = timestamp or datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


class MissingInputError(RolloutError):
    """Exception raised when a required input is empty or absent."""

    def __init__(
        self,
        message: str,
        input_name: str,
        error_code: str = "MISSING_INPUT",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
        self.input_name = input_name
        self.details["input"] = input_name


class ResourceNotFoundError(RolloutError):
    """Exception raised when an existence probe reports the resource absent."""

    def __init__(
        self,
        message: str,
        kind: str,
        identifiers: Optional[Dict[str, str]] = None,
        error_code: str = "RESOURCE_NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
        self.kind = kind
        self.identifiers = identifiers or {}
        self.details["kind"] = kind
        if self.identifiers:
            self.details["identifiers"] = self.identifiers


class DeploymentFileNotFoundError(RolloutError):
    """Exception raised when the deployment YAML file is missing."""

    def __init__(
        self,
        message: str,
        path: str,
        error_code: str = "DEPLOYMENT_FILE_NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
        self.path = path
        self.details["path"] = path


class DeploymentCreationError(RolloutError):
    """Exception raised when ``az ml online-deployment create`` fails."""

    def __init__(
        self,
        message: str = "Deployment creation failed.",
        error_code: str = "DEPLOYMENT_CREATION_FAILED",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class TrafficSpecError(RolloutError):
    """Exception raised for a traffic map that cannot be parsed."""

    def __init__(
        self,
        message: str,
        error_code: str = "INVALID_TRAFFIC_SPEC",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
