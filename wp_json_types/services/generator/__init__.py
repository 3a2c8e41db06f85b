"""
Declaration generator abstraction layer.

Factory function for creating a generator from configuration.
"""

from .base import BaseDeclarationGenerator

__all__ = ["BaseDeclarationGenerator", "create_generator"]


def create_generator(command: str | None = None) -> BaseDeclarationGenerator:
    """Create the configured declaration generator.

    Args:
        command: Generator command line (falls back to settings).

    Returns:
        BaseDeclarationGenerator implementation instance
    """
    from .dtsgen import DtsgenGenerator

    return DtsgenGenerator(command=command)
