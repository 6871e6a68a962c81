"""Custom exception hierarchy for the Nirman estimator."""

from __future__ import annotations


class NirmanError(Exception):
    """Base exception for all Nirman errors."""


class InvalidConfigurationError(NirmanError, ValueError):
    """Raised when a project configuration cannot be priced."""


class PricingDataError(NirmanError):
    """Raised when a lookup table has no entry for a closed key."""


class EstimateNotFoundError(NirmanError):
    """Raised when a saved estimate id is not in the store."""


class EstimateStoreError(NirmanError):
    """Raised when the saved-estimates file cannot be read or written."""


class StepValidationError(NirmanError):
    """Raised when a wizard step is incomplete.

    Carries a short ``title`` and a user-facing ``message`` so the UI can
    surface it as a toast without re-deriving the text.
    """

    def __init__(self, step: int, title: str, message: str) -> None:
        super().__init__(f"Step {step}: {title} - {message}")
        self.step = step
        self.title = title
        self.message = message
