# ABOUTME: Advisory validation for server entries
# ABOUTME: The store never enforces these checks; the CLI reports them before writing
import shutil
from dataclasses import dataclass
from urllib.parse import urlparse

from mcpscope.models import SERVER_TYPES, ServerEntry


@dataclass(frozen=True)
class ValidationError:
    """Represents a validation error or warning.

    ABOUTME: Uses frozen dataclass for immutability
    ABOUTME: Severity level distinguishes between blocking errors and warnings
    """
    server_name: str
    message: str
    severity: str  # 'error' or 'warning'


def validate_command_exists(command: str) -> ValidationError | None:
    """Validate that a command exists on the system.

    ABOUTME: Uses shutil.which() for cross-platform command lookup
    ABOUTME: Only a warning: the command may live inside WSL instead
    """
    if shutil.which(command) is None:
        return ValidationError(
            server_name="",
            message=f"Command not found on PATH: {command}",
            severity="warning"
        )
    return None


def validate_url(url: str) -> ValidationError | None:
    """Validate that a URL uses HTTP(S) and has a host.

    Returns:
        ValidationError if URL invalid, None otherwise
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        return ValidationError(
            server_name="",
            message=f"Invalid URL format '{url}': {e}",
            severity="error"
        )
    if parsed.scheme not in ("http", "https"):
        return ValidationError(
            server_name="",
            message=f"URL must use HTTP or HTTPS scheme: {url}",
            severity="error"
        )
    if not parsed.netloc:
        return ValidationError(
            server_name="",
            message=f"URL missing host/domain: {url}",
            severity="error"
        )
    return None


def validate_server_entry(entry: ServerEntry) -> list[ValidationError]:
    """Check that an entry carries the fields its type needs.

    ABOUTME: stdio needs a command; http and sse need a URL
    ABOUTME: Unknown types are reported as warnings and otherwise left alone

    Examples:
        >>> validate_server_entry(ServerEntry(name="sentry", type="http", url="https://mcp.sentry.dev/mcp"))
        []
    """
    errors: list[ValidationError] = []

    def add(problem: ValidationError) -> None:
        errors.append(ValidationError(
            server_name=entry.name,
            message=problem.message,
            severity=problem.severity
        ))

    if entry.type not in SERVER_TYPES:
        errors.append(ValidationError(
            server_name=entry.name,
            message=f"Unknown server type '{entry.type}', expected one of {', '.join(SERVER_TYPES)}",
            severity="warning"
        ))
        return errors

    if entry.type == "stdio":
        if not entry.command:
            errors.append(ValidationError(
                server_name=entry.name,
                message="stdio server has no command",
                severity="error"
            ))
        else:
            cmd_error = validate_command_exists(entry.command)
            if cmd_error:
                add(cmd_error)
    else:
        if not entry.url:
            errors.append(ValidationError(
                server_name=entry.name,
                message=f"{entry.type} server has no url",
                severity="error"
            ))
        else:
            url_error = validate_url(entry.url)
            if url_error:
                add(url_error)

    return errors
