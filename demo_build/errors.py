"""Error definitions for demo_build.

Every error carries a stable ``code`` for programmatic handling and a
``fatal`` flag. Fatal errors end the run with exit status 1; non-fatal
ones are logged and the run continues.
"""

REMEDIATION = "git submodule update --init"

SUBMODULE_UNAVAILABLE = "submodule_unavailable"
FINGERPRINT_QUERY_FAILED = "fingerprint_query_failed"
EXTERNAL_BUILD_FAILED = "external_build_failed"
BUILD_TIMEOUT = "build_timeout"
EXECUTION_ERROR = "execution_error"
STAGING_FAILED = "staging_failed"
CACHE_WRITE_FAILED = "cache_write_failed"


class DemoBuildError(Exception):
    """Base error for demo build operations."""

    fatal = True

    def __init__(self, message: str, code: str = "demo_build_error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def remediation(self) -> str | None:
        """Command that fixes the condition, if one is known."""
        return None


class SubmoduleUnavailableError(DemoBuildError):
    """Raised when the nested project is not checked out or initialized."""

    def __init__(self, message: str, code: str = SUBMODULE_UNAVAILABLE) -> None:
        super().__init__(message, code=code)

    @property
    def remediation(self) -> str | None:
        return REMEDIATION


class FingerprintQueryError(DemoBuildError):
    """Raised when the submodule commit cannot be read."""

    def __init__(self, message: str, code: str = FINGERPRINT_QUERY_FAILED) -> None:
        super().__init__(message, code=code)

    @property
    def remediation(self) -> str | None:
        return REMEDIATION


class ExternalBuildError(DemoBuildError):
    """Raised when the build script fails, times out or cannot start."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        code: str = EXTERNAL_BUILD_FAILED,
    ) -> None:
        super().__init__(message, code=code)
        self.exit_code = exit_code


class StagingError(DemoBuildError):
    """Raised when build output cannot be copied into the public directory."""

    def __init__(self, message: str, code: str = STAGING_FAILED) -> None:
        super().__init__(message, code=code)


class CacheWriteError(DemoBuildError):
    """Raised when the fingerprint cache cannot be written.

    Not fatal: the staged output is already correct, the next run just
    rebuilds again.
    """

    fatal = False

    def __init__(self, message: str, code: str = CACHE_WRITE_FAILED) -> None:
        super().__init__(message, code=code)


__all__ = [
    "CACHE_WRITE_FAILED",
    "EXECUTION_ERROR",
    "BUILD_TIMEOUT",
    "EXTERNAL_BUILD_FAILED",
    "FINGERPRINT_QUERY_FAILED",
    "REMEDIATION",
    "STAGING_FAILED",
    "SUBMODULE_UNAVAILABLE",
    "CacheWriteError",
    "DemoBuildError",
    "ExternalBuildError",
    "FingerprintQueryError",
    "StagingError",
    "SubmoduleUnavailableError",
]
