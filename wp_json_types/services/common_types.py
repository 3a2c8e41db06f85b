"""
Hoist inline string-literal unions into shared named types.

Works on the bundled text line by line. A member such as::

    status: "publish" | "draft";

inside ``export interface WpPost`` in the edit namespace becomes
``status: WpEditPostStatus;`` and ``export type WpEditPostStatus =
"publish" | "draft"`` is collected for ``common.ts``. The enclosing
interface is the nearest ``export interface`` line above the member within
the same context block.
"""

import logging
import re
from dataclasses import dataclass

from wp_json_types.core.exceptions import CommonTypeCollisionError
from wp_json_types.core.models import OutputContext
from wp_json_types.core.utils import snake_to_pascal

logger = logging.getLogger(__name__)

UNION_MEMBER = re.compile(r'([a-z_]+)\??: \(?"([^;]+)"\)?[\w\s_|\[\]]*;')
NAMESPACE_NAME = re.compile(r"\s*(\w+)")
INTERFACE_DECL = re.compile(r"export interface (\w+) {")

NAMESPACE_SEPARATOR = "export namespace"


@dataclass(frozen=True)
class CommonType:
    """A literal union hoisted into a named export."""

    name: str
    union: str

    @property
    def export(self) -> str:
        return f'export type {self.name} = "{self.union}"'


def context_label(namespace: str) -> str:
    """``EditContext`` -> ``Edit``."""
    return namespace.removesuffix("Context")


def enclosing_interface(lines: list[str], index: int) -> str | None:
    """Name of the nearest ``export interface`` declared above ``lines[index]``."""
    for line in reversed(lines[:index]):
        if "export interface" in line:
            match = INTERFACE_DECL.search(line)
            return match.group(1) if match else None
    return None


class CommonTypeExtractor:
    """Single forward pass collecting hoisted types in order of appearance."""

    def __init__(self) -> None:
        self._types: dict[str, CommonType] = {}

    @property
    def types(self) -> list[CommonType]:
        return list(self._types.values())

    def _register(self, name: str, union: str) -> None:
        existing = self._types.get(name)
        if existing is None:
            self._types[name] = CommonType(name=name, union=union)
        elif existing.union != union:
            raise CommonTypeCollisionError(name, existing.union, union)

    def rewrite_block(self, block: str, label: str) -> str:
        """Rewrite every literal-union member of one context block."""
        lines = block.split("\n")
        rewritten = []
        for index, line in enumerate(lines):
            match = UNION_MEMBER.search(line)
            parent = enclosing_interface(lines, index) if match else None
            if match is None or parent is None:
                rewritten.append(line)
                continue

            field_name, union = match.group(1), match.group(2)
            name = f"Wp{label}{parent.replace('Wp', '', 1)}{snake_to_pascal(field_name)}"
            self._register(name, union)
            rewritten.append(line.replace(f'"{union}"', name, 1))
        return "\n".join(rewritten)

    def rewrite(self, bundle: str) -> str:
        """Rewrite the whole bundle; the first block is the view context."""
        first, *rest = bundle.split(NAMESPACE_SEPARATOR)
        blocks = [self.rewrite_block(first, OutputContext.view.label)]
        for block in rest:
            # Each block starts right after "export namespace", i.e. with its name
            match = NAMESPACE_NAME.match(block)
            label = context_label(match.group(1)) if match else ""
            blocks.append(self.rewrite_block(block, label))
        return NAMESPACE_SEPARATOR.join(blocks)


def import_statement(types: list[CommonType]) -> str:
    return f"import {{{', '.join(t.name for t in types)}}} from './common'"


def extract_common_types(bundle: str, module_decl: str) -> tuple[str, str, list[CommonType]]:
    """Hoist literal unions out of ``bundle``.

    Args:
        bundle: The bundled ``index.d.ts`` source.
        module_decl: The ``declare module '...' {`` line of the bundle.

    Returns:
        ``(new_bundle, common_source, types)``. When no unions are found the
        bundle is returned unchanged and ``common_source`` is empty.

    Raises:
        CommonTypeCollisionError: If one composite name maps to two different unions.
    """
    extractor = CommonTypeExtractor()
    rewritten = extractor.rewrite(bundle)
    types = extractor.types
    if not types:
        return bundle, "", []

    header = import_statement(types) + "\n" + module_decl + "\n\texport * from './common'"
    new_bundle = rewritten.replace(module_decl, header, 1)
    common = "\n\n".join(t.export for t in types)
    logger.info("Hoisted %d common types", len(types))
    return new_bundle, common, types
