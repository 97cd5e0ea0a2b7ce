"""
Exception hierarchy for envinfo.

Only the fatal failure modes are represented here. Everything else that can go
wrong while probing the runtime is contained inside the probe and surfaces as a
documented sentinel value instead of an exception.

Each exception includes:
- Clear error message
- Suggested user action
- Original exception preserved for debugging
"""

from typing import Optional


class EnvironmentInfoError(Exception):
    """
    Base exception for all envinfo errors.

    Raised errors of this family are meant to abort process startup rather
    than be caught and logged.
    """

    def __init__(
        self,
        message: str,
        original_exception: Optional[BaseException] = None,
        suggested_action: Optional[str] = None,
    ):
        """
        Initialize EnvironmentInfoError.

        Args:
            message: Human-readable error message
            original_exception: The original exception that was caught
            suggested_action: Suggested action for the user to resolve the issue
        """
        self.message = message
        self.original_exception = original_exception
        self.suggested_action = suggested_action

        error_parts = [message]

        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        if original_exception:
            error_parts.append(f"Original error: {str(original_exception)}")

        super().__init__(" | ".join(error_parts))


class VersionResolutionError(EnvironmentInfoError):
    """
    Raised when the version properties resource exists but is corrupt.

    This typically indicates:
    - The resource was generated by a broken build step
    - A timestamp was hand-edited into an unsupported format

    An absent or unreadable resource never raises this error; those cases
    resolve to the documented defaults.
    """

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        key: Optional[str] = None,
        original_exception: Optional[BaseException] = None,
    ):
        """
        Initialize VersionResolutionError.

        Args:
            message: Human-readable error message
            resource: Name of the properties resource that failed to parse
            key: Property key holding the malformed value
            original_exception: The original parse exception
        """
        self.resource = resource
        self.key = key

        suggested_action = "Regenerate the version file with 'envinfo generate-version-file'"

        super().__init__(
            message=message,
            original_exception=original_exception,
            suggested_action=suggested_action,
        )


class MemoryConfigurationError(EnvironmentInfoError):
    """
    Raised when the process cannot size its own memory budget.

    This happens only when no explicit memory ceiling is configured and the
    amount of physical memory cannot be determined either.
    """

    def __init__(
        self,
        message: str,
        original_exception: Optional[BaseException] = None,
    ):
        """
        Initialize MemoryConfigurationError.

        Args:
            message: Human-readable error message
            original_exception: The exception raised by the physical memory lookup
        """
        suggested_action = (
            "Set the maximum memory explicitly, e.g. 'memory.max_bytes: 536870912' "
            "in envinfo.config.yaml for 512 megabytes"
        )

        super().__init__(
            message=message,
            original_exception=original_exception,
            suggested_action=suggested_action,
        )


__all__ = [
    "EnvironmentInfoError",
    "VersionResolutionError",
    "MemoryConfigurationError",
]
