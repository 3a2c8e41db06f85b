"""
Abstract base class for schema-to-declaration generators.

The generator is a black box: it takes one JSON-Schema document (with an
``id``, a ``title`` and ``properties``) and returns TypeScript declaration
source. The only behavior relied on is that a schema with nothing useful in
it produces an empty ``{}`` type.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseDeclarationGenerator(ABC):
    """Interface every declaration generator must implement."""

    @abstractmethod
    async def generate(self, schema: dict[str, Any]) -> str:
        """Generate declaration source for a single schema.

        Args:
            schema: A JSON-Schema document with ``id`` and ``title`` set.

        Returns:
            The generated ``.d.ts`` text, wrapper lines included.

        Raises:
            GenerationError: If the generator cannot produce output.
        """
