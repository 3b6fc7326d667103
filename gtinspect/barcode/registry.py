"""
Ordered registry of barcode formats and the format resolution algorithm.
"""

from collections.abc import Iterable, Iterator
from functools import lru_cache

import structlog

from gtinspect.barcode.errors import RegistryError
from gtinspect.barcode.formats import BUILTIN_FORMATS, FormatDescriptor
from gtinspect.config import get_settings

logger = structlog.get_logger(__name__)


class FormatRegistry:
    """
    Holds the known barcode formats in registration order.

    Registration order is the tie-break between formats of the same length:
    resolve() returns the first format that accepts a code. The registry is
    frozen on first resolution, after which it is read-only and may be shared
    freely.
    """

    def __init__(self, formats: Iterable[FormatDescriptor] = ()):
        self._formats: list[FormatDescriptor] = []
        self._frozen = False
        for descriptor in formats:
            self.register(descriptor)

    def register(self, descriptor: FormatDescriptor) -> FormatDescriptor:
        """
        Add a format to the end of the resolution order.

        Raises:
            RegistryError: If the registry is frozen or the name is taken
        """
        if self._frozen:
            raise RegistryError(
                f"Cannot register {descriptor.name}: registry is already in use"
            )
        if descriptor.name in self:
            raise RegistryError(f"Format already registered: {descriptor.name}")

        self._formats.append(descriptor)
        return descriptor

    def freeze(self) -> None:
        """End the registration phase."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> FormatDescriptor | None:
        """Look up a format by name."""
        for descriptor in self._formats:
            if descriptor.name == name:
                return descriptor
        return None

    def names(self) -> list[str]:
        """Return format names in resolution order."""
        return [descriptor.name for descriptor in self._formats]

    def resolve(self, code: str) -> FormatDescriptor | None:
        """
        Find the first registered format that accepts a digit string.

        Each format is checked for, in order:
        1. Matching length
        2. Valid checksum
        3. A plausible embedded value, when the (truncated) area ID flags one

        Args:
            code: Digit-only barcode string

        Returns:
            The matching format, or None if no format accepts the code
        """
        self._frozen = True

        for descriptor in self._formats:
            if len(code) != descriptor.total_length:
                continue

            is_valid, computed = descriptor.algorithm.verify(code)
            if not is_valid:
                logger.debug(
                    "Checksum mismatch",
                    format=descriptor.name,
                    code=code,
                    expected=computed,
                )
                continue

            if descriptor.supports_embedded_value and not self._embedded_value_plausible(
                descriptor, code
            ):
                logger.debug(
                    "Embedded value out of range",
                    format=descriptor.name,
                    code=code,
                    max_embedded_value=descriptor.max_embedded_value,
                )
                continue

            return descriptor

        return None

    @staticmethod
    def _embedded_value_plausible(descriptor: FormatDescriptor, code: str) -> bool:
        # Identifiers are matched against the area ID minus its last digit here,
        # while Barcode.has_embedded_* compare the full area ID.
        start = descriptor.area_id_index
        embedded_id = code[start : start + descriptor.area_id_length - 1]
        if embedded_id not in descriptor.embedded_identifiers:
            return True

        start = descriptor.embedded_value_index
        value = int(code[start : start + descriptor.embedded_value_length])
        return 0 <= value <= descriptor.max_embedded_value

    def __iter__(self) -> Iterator[FormatDescriptor]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def __contains__(self, name: object) -> bool:
        if isinstance(name, FormatDescriptor):
            name = name.name
        return any(descriptor.name == name for descriptor in self._formats)

    def __repr__(self) -> str:
        return f"FormatRegistry({self.names()!r})"


def build_registry(names: Iterable[str] | None = None) -> FormatRegistry:
    """
    Build a registry from the built-in formats.

    Args:
        names: Built-in format names to include, in resolution order
            (default: all built-ins in their declared order)

    Raises:
        RegistryError: If a name is not a built-in format
    """
    if names is None:
        return FormatRegistry(BUILTIN_FORMATS)

    builtins = {descriptor.name: descriptor for descriptor in BUILTIN_FORMATS}
    registry = FormatRegistry()
    for name in names:
        try:
            registry.register(builtins[name])
        except KeyError as exc:
            raise RegistryError(f"Unknown barcode format: {name}") from exc
    return registry


@lru_cache
def get_default_registry() -> FormatRegistry:
    """Get the cached process-wide registry configured from settings."""
    return build_registry(get_settings().enabled_formats)
