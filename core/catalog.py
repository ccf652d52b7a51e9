# =============================================================================
# core/catalog.py  -  The full tool catalog
# =============================================================================
#
# Collects every area's DESCRIPTORS into one frozen registry.  The order here
# is the order tools/list reports them in.
# =============================================================================

from core import fields, lists, notes, opportunities, organizations, people
from core.registry import OperationRegistry


_AREAS = (people, organizations, opportunities, notes, lists, fields)


def build_registry() -> OperationRegistry:
    registry = OperationRegistry()
    for area in _AREAS:
        for descriptor in area.DESCRIPTORS:
            registry.register(descriptor)
    return registry.freeze()
