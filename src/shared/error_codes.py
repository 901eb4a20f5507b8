# src/shared/error_codes.py
# Central mapping that aligns with the error contract.
# Keep keys stable: API clients and the realtime channel rely on these.
from enum import Enum


class ErrorKind(str, Enum):
    """Stable error categories every rejected operation is classified into."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    FORBIDDEN = "forbidden"
    MISSING_PRICING_RULE = "missing_pricing_rule"
    CONFLICT = "conflict"
    GENERATION_EXHAUSTED = "generation_exhausted"
    INTERNAL = "internal_error"

    def __str__(self) -> str:
        return self.value


ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 422,
        "message": "Validation failed for one or more fields."
    },

    # ─── Lookup ────────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Resource not found."
    },

    # ─── Lifecycle ─────────────────────────────────────────────────────────
    "invalid_transition": {
        "http": 409,
        "message": "Operation not allowed in the course's current status."
    },
    "conflict": {
        "http": 409,
        "message": "Conflict with existing resource."
    },

    # ─── Authorization ─────────────────────────────────────────────────────
    "unauthorized": {
        "http": 401,
        "message": "Unauthorized. Please identify the acting user."
    },
    "forbidden": {
        "http": 403,
        "message": "You are not allowed to perform this action."
    },

    # ─── Billing ───────────────────────────────────────────────────────────
    "missing_pricing_rule": {
        "http": 422,
        "message": "No price is defined for this organization and course type."
    },

    # ─── Identifiers ───────────────────────────────────────────────────────
    "generation_exhausted": {
        "http": 503,
        "message": "No free course number is left for this date, organization and course type."
    },

    # ─── Internal ──────────────────────────────────────────────────────────
    "internal_error": {
        "http": 500,
        "message": "An unexpected error occurred. Please try again later."
    },
}
