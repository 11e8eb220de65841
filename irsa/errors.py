"""
Errors raised while turning stack configuration into IAM policy inputs
"""

from typing import Any, Iterable


class ConfigurationError(ValueError):
    """Raised when a configuration value falls outside its permitted set"""

    def __init__(self, field: str, value: Any, permitted: Iterable[str] = ()):
        self.field = field
        self.value = value
        self.permitted = list(permitted)
        message = f"Invalid value {value!r} for '{field}'"
        if self.permitted:
            message += f". Valid values: {', '.join(self.permitted)}"
        super().__init__(message)
