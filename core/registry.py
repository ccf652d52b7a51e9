# =============================================================================
# core/registry.py  -  Operation Registry
# =============================================================================
#
# A name -> OperationDescriptor map that is filled once at startup and then
# frozen.  After freeze() nothing can be added; descriptors themselves are
# frozen dataclasses, so resolve() hands back the same object every time.
#
# Registering a name twice is a programming error and raises immediately,
# which stops the server from starting with an ambiguous catalog.
# =============================================================================

from typing import Iterator, Optional

from core.errors import RegistrationError
from core.models import OperationDescriptor


class OperationRegistry:
    def __init__(self):
        self._ops: dict[str, OperationDescriptor] = {}
        self._frozen = False

    def register(self, descriptor: OperationDescriptor) -> OperationDescriptor:
        if self._frozen:
            raise RegistrationError(
                f"Cannot register {descriptor.name!r}: registry is frozen"
            )
        if descriptor.name in self._ops:
            raise RegistrationError(f"Operation already registered: {descriptor.name!r}")
        self._ops[descriptor.name] = descriptor
        return descriptor

    def freeze(self) -> "OperationRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, name: str) -> Optional[OperationDescriptor]:
        """Look up an operation by name; None if it isn't registered."""
        return self._ops.get(name)

    def names(self) -> list[str]:
        return list(self._ops)

    def descriptors(self) -> list[OperationDescriptor]:
        """All descriptors, in registration order."""
        return list(self._ops.values())

    def __contains__(self, name: object) -> bool:
        return name in self._ops

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[OperationDescriptor]:
        return iter(self.descriptors())
