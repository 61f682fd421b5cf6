"""
Migration errors.

Every step either completes or raises one of these. The message is what the
operator sees when the pipeline aborts, so it must be readable on its own.
"""


class MigrationError(Exception):
    """Base class for all pipeline-fatal errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ArgumentError(MigrationError):
    """Wrong number of command-line arguments."""
    pass


class PathValidationError(MigrationError):
    """Target path is missing, not a directory, or cannot be inspected."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class PrerequisiteError(MigrationError):
    """A required executable is not on PATH."""

    def __init__(self, message: str, tool: str):
        super().__init__(message)
        self.tool = tool


class SpawnError(MigrationError):
    """The converter child process could not be started."""
    pass


class PromptTimeoutError(MigrationError):
    """The converter stopped producing output while waiting on an unrecognized prompt."""

    def __init__(self, message: str, pending_output: str = ""):
        super().__init__(message)
        self.pending_output = pending_output


class ConverterExitError(MigrationError):
    """The converter exited with a non-zero status (strict mode only)."""

    def __init__(self, message: str, returncode: int):
        super().__init__(message)
        self.returncode = returncode


class PackageManagerError(MigrationError):
    """The package manager reported a failure that is not an idempotent no-op."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class ArtifactError(MigrationError):
    """A config artifact could not be read, parsed or written."""
    pass


class ConflictError(MigrationError):
    """An artifact already holds a value that differs from the one we need."""
    pass


class ConfigurationError(MigrationError):
    """Settings or the prompt table file are invalid."""
    pass
