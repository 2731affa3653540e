"""Exit codes used by CLI commands."""

VALIDATION_EXIT_CODE = 10
RESOLUTION_EXIT_CODE = 11
STORAGE_EXIT_CODE = 12

__all__ = ["VALIDATION_EXIT_CODE", "RESOLUTION_EXIT_CODE", "STORAGE_EXIT_CODE"]
