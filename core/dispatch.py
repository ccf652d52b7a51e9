# =============================================================================
# core/dispatch.py  -  Dispatch Adapter
# =============================================================================
#
# HOW A CALL FLOWS THROUGH HERE:
#   1. Resolve the tool name in the registry       -> UnknownOperation
#   2. Validate raw arguments with its pydantic model -> InvalidArguments
#   3. Run the handler with the Affinity client     -> RemoteCallFailed
#   4. Return the handler's Reply
#
# Steps 1 and 2 happen before any network I/O, so a bad name or a typo'd
# argument never reaches Affinity.
#
# This module knows nothing about MCP.  tools/mcp_server.py wraps it.
# =============================================================================

from typing import Any, Optional

from pydantic import ValidationError

from core.context import AppContext
from core.errors import InvalidArguments, UnknownOperation
from core.models import Reply


def describe_validation_error(exc: ValidationError) -> str:
    """One "location: message" clause per violated constraint."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class Dispatcher:
    def __init__(self, context: AppContext):
        self.context = context

    async def handle(self, name: str, raw_args: Optional[dict[str, Any]] = None) -> Reply:
        """Validate and run one operation.

        Raises:
            UnknownOperation: name isn't registered.
            InvalidArguments: raw_args don't match the operation's schema.
            RemoteCallFailed: the Affinity call failed.
        """
        descriptor = self.context.registry.resolve(name)
        if descriptor is None:
            raise UnknownOperation(name)

        try:
            args = descriptor.input_model.model_validate(raw_args if raw_args is not None else {})
        except ValidationError as exc:
            raise InvalidArguments(describe_validation_error(exc)) from exc

        return await descriptor.handler(self.context.client, args)

    def list_operations(self) -> list[dict[str, Any]]:
        """Discovery listing: what each operation is and what it accepts."""
        return [
            {
                "name": d.name,
                "title": d.title,
                "description": d.description,
                "input_schema": d.input_schema(),
                "annotations": {
                    "read_only": d.annotations.read_only,
                    "destructive": d.annotations.destructive,
                },
            }
            for d in self.context.registry
        ]
