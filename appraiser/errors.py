"""Error taxonomy for the appraisal pipeline."""

from __future__ import annotations

from typing import Optional


class AppraiserError(Exception):
    """Base exception for all appraiser errors."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputValidationError(AppraiserError):
    """Caller supplied an unusable image payload. Analysis never starts."""

    status_code = 400


class ExternalServiceError(AppraiserError):
    """The completion service returned nothing usable for a stage."""

    status_code = 502

    def __init__(self, message: str, service: str = "OpenAI", stage: Optional[str] = None):
        super().__init__(message)
        self.service = service
        self.stage = stage

    def __str__(self) -> str:
        return f"{self.service}: {self.message}"
