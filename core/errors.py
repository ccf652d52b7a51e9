# =============================================================================
# core/errors.py  -  Error Taxonomy
# =============================================================================
#
# Every failure a caller can see falls into one of three kinds:
#
#   UnknownOperation   the tool name is not in the registry (caller error)
#   InvalidArguments   the arguments don't fit the declared schema (caller error)
#   RemoteCallFailed   Affinity answered with an error, or never answered
#
# They share the Fault base so the MCP layer can translate all three into a
# single ToolError without caring which one it got.
#
# Startup problems (duplicate registration, missing API key) are NOT faults.
# They stop the process before it ever accepts a request.
# =============================================================================

from typing import Optional


class AffinityError(Exception):
    """Base class for everything this server raises on purpose."""


class RegistrationError(AffinityError):
    """A duplicate name, or a registration after the catalog was frozen."""


class ConfigError(AffinityError):
    """Process configuration is missing or malformed."""


class Fault(AffinityError):
    """A per-call failure reported back to the caller.

    Attributes:
        kind:   Stable machine-readable category (e.g. "invalid_arguments").
        detail: Human-readable explanation, passed to the caller verbatim.
    """

    kind = "fault"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.kind}: {self.detail}"


class UnknownOperation(Fault):
    kind = "unknown_operation"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(Fault):
    kind = "invalid_arguments"


class RemoteCallFailed(Fault):
    """Affinity returned a non-2xx status, or the request never completed.

    status_code is None for network-level failures (DNS, refused, timeout).
    """

    kind = "remote_call_failed"

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.status_code = status_code
