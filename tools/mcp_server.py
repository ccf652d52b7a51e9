# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (the MCP translation layer)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Publishes every operation in the registry as an MCP tool and translates
#   between MCP and core/:
#     - tools/list  -> name, title, description, JSON schema, annotations
#     - tools/call  -> Dispatcher.handle() -> text content, or an error result
#
# HOW IT WORKS (the flow):
#   1. An MCP client POSTs a JSON-RPC request to http://HOST:PORT/mcp
#   2. FastMCP decodes it and calls AffinityTool.run(arguments)
#   3. run() hands the name + raw arguments to the Dispatcher
#   4. The Dispatcher validates, calls Affinity, and returns a Reply
#   5. run() converts the Reply to MCP TextContent
#   6. Any Fault becomes a ToolError, which FastMCP reports with isError=true
#
# WHY A Tool SUBCLASS INSTEAD OF @mcp.tool()?
#   @mcp.tool() builds the schema from a Python function signature.  Our
#   schemas already exist as pydantic models (closed, with defaults), and the
#   same Dispatcher also serves tests and other callers.  Subclassing Tool
#   publishes those schemas as-is and keeps a single validation path.
#
# TRANSPORT:
#   Streamable HTTP, stateless, JSON responses.  No session is kept between
#   requests, so each call stands alone.
# =============================================================================

import logging
import sys
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field

from core.context import AppContext
from core.dispatch import Dispatcher
from core.errors import Fault
from core.models import OperationDescriptor, Reply


SERVER_NAME = "affinity-mcp-server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR so they never mix with protocol output if the server is
# ever run over stdio.
#
# ANSI COLOR CODES:
#     - CYAN for incoming tool calls (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
#     - RED for faults
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Faults
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, params: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, reply: Reply) -> Reply:
    """Log the reply text (first line only) in GREEN, then return it."""
    first = reply.content[0].text.splitlines()[0] if reply.content else ""
    logging.info(f"{_GREEN}  ← {tool_name} response: {first}{_RESET}")
    return reply


def _log_fault(tool_name: str, fault: Fault) -> None:
    logging.warning(f"{_RED}  ✗ {tool_name} failed: {fault}{_RESET}")


# =============================================================================
# The tool wrapper
# =============================================================================
class AffinityTool(Tool):
    """An MCP tool backed by one registry entry."""

    dispatcher: Any = Field(exclude=True)

    @classmethod
    def from_descriptor(cls, descriptor: OperationDescriptor, dispatcher: Dispatcher) -> "AffinityTool":
        return cls(
            name=descriptor.name,
            title=descriptor.title,
            description=descriptor.description,
            parameters=descriptor.input_schema(),
            annotations=ToolAnnotations(
                title=descriptor.title,
                readOnlyHint=descriptor.annotations.read_only,
                destructiveHint=descriptor.annotations.destructive,
            ),
            dispatcher=dispatcher,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments or {})
        try:
            reply = await self.dispatcher.handle(self.name, arguments)
        except Fault as fault:
            _log_fault(self.name, fault)
            raise ToolError(str(fault)) from fault

        _log_response(self.name, reply)
        return ToolResult(
            content=[TextContent(type=item.type, text=item.text) for item in reply.content]
        )


# =============================================================================
# Server construction
# =============================================================================
def create_server(context: AppContext) -> FastMCP:
    """Build a FastMCP server exposing every registered operation."""
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)
    dispatcher = Dispatcher(context)
    for descriptor in context.registry:
        mcp.add_tool(AffinityTool.from_descriptor(descriptor, dispatcher))
    _log_status(f"Registered {len(context.registry)} tools")
    return mcp


async def serve(context: AppContext) -> None:
    """Run the streamable HTTP endpoint until the process is stopped."""
    settings = context.settings
    mcp = create_server(context)
    logging.info(f"Affinity MCP server running on {settings.endpoint}")
    try:
        await mcp.run_async(
            transport="http",
            host=settings.host,
            port=settings.port,
            path=settings.mcp_path,
            stateless_http=True,
            json_response=True,
        )
    finally:
        await context.aclose()

