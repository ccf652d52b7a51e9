# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything the server does, minus the MCP wiring:
# argument models, the Affinity REST client, the operation registry, the
# dispatcher, and one module per CRM area (people, organizations,
# opportunities, notes, lists, fields).
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The dispatcher can be driven
#   directly (that's how most tests use it); tools/ only translates.
# =============================================================================
