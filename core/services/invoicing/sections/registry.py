"""
Section Renderer Registry

Central registry resolving section kinds to their renderer implementations.
"""

from typing import Callable, Protocol

from django.utils.safestring import SafeString

from ..exceptions import UnsupportedSectionError
from ..schema import Section, SectionKind


class SectionRenderer(Protocol):
    """Protocol for section renderers"""

    def __call__(self, section: Section, context) -> SafeString:
        """Render one section to an escaped HTML fragment"""
        ...


class SectionRegistry:
    """Registry for section renderers"""

    def __init__(self):
        self._renderers: dict[SectionKind, SectionRenderer] = {}

    def register(self, kind: SectionKind, renderer: SectionRenderer) -> None:
        """
        Register a renderer for a section kind.

        Args:
            kind: Section kind handled by the renderer
            renderer: Callable taking (section, context) and returning markup
        """
        kind = SectionKind(kind)
        if kind in self._renderers:
            raise ValueError(f"Section renderer for '{kind.value}' is already registered")
        self._renderers[kind] = renderer

    def get_renderer(self, kind) -> SectionRenderer:
        """
        Get the renderer for a section kind.

        Raises:
            UnsupportedSectionError: If no renderer is registered for the kind
        """
        try:
            return self._renderers[SectionKind(kind)]
        except (KeyError, ValueError):
            raise UnsupportedSectionError(f"No renderer registered for section type '{kind}'")

    def is_registered(self, kind) -> bool:
        try:
            return SectionKind(kind) in self._renderers
        except ValueError:
            return False

    def list_kinds(self) -> list[SectionKind]:
        return list(self._renderers.keys())


# Global registry instance
_registry = SectionRegistry()


def register_renderer(kind: SectionKind, renderer: Callable) -> None:
    """Register a section renderer in the global registry"""
    _registry.register(kind, renderer)


def get_renderer(kind) -> SectionRenderer:
    """Get a section renderer from the global registry"""
    return _registry.get_renderer(kind)


def get_registry() -> SectionRegistry:
    return _registry
