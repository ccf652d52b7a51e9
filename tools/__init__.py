# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP translation layer.
#
# ARCHITECTURAL ROLE:
#   tools/ sits between the MCP protocol and core/.  It:
#     1. Publishes each registry entry as an MCP tool (schema + annotations)
#     2. Forwards calls to core.dispatch.Dispatcher
#     3. Converts Replies to MCP text content and Faults to ToolError
#     4. Runs the streamable HTTP listener
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments (the Dispatcher does)
#   - They do NOT talk to Affinity (core/ handlers do)
# =============================================================================
