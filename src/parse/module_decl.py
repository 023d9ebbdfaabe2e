"""Structural extraction of module declarations.

Reads the ``imports``, ``exports``, ``providers`` and ``controllers`` lists
out of an ``@Module({...})`` decorator without a full language parser. All
scanning happens on a masked copy of the document where comment and string
literal contents are blanked out, so brackets inside them never count.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from artifacts.models.graph import ModuleNode
from rules.config import ExtractionRules
from utils import path_to_module_name

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

_MODULE_MARKER = re.compile(r"@Module\s*\(")
_CLASS_DECL = re.compile(r"\bclass\s+([A-Za-z_$][\w$]*)")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_PROPERTY_KEY = re.compile(r"^([A-Za-z_$][\w$]*)\s*:")
_LEADING_REFERENCE = re.compile(r"^([A-Za-z_$][\w$]*)")
_FORWARD_REF = re.compile(r"^forwardRef\s*\(\s*\(\s*\)\s*=>\s*([A-Za-z_$][\w$]*)")
_LITERALS = re.compile(
    r"""
    (?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*[\s\S]*?\*/)
    """,
    re.VERBOSE,
)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}

# Tokens that can appear where a module reference is expected but never
# name a module: the decorator itself and configuration-method fragments.
IMPORT_DENY_LIST = frozenset(
    {
        "Module",
        "forRoot",
        "forRootAsync",
        "forFeature",
        "forFeatureAsync",
        "forChild",
        "register",
        "registerAsync",
        "forwardRef",
    }
)


def _mask_literals(text: str) -> str:
    """Blank out comments and string contents, preserving offsets."""

    def _blank(match: re.Match[str]) -> str:
        token = match.group(0)
        if match.group("string") is not None:
            return token[0] + " " * (len(token) - 2) + token[-1]
        return re.sub(r"[^\n]", " ", token)

    return _LITERALS.sub(_blank, text)


def _matching_close(text: str, open_index: int) -> int | None:
    """Return the index closing the bracket at ``open_index``, if balanced."""
    stack: list[str] = []
    for index in range(open_index, len(text)):
        char = text[index]
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return index
    return None


def _split_top_level(body: str) -> list[str] | None:
    """Split on commas outside any brackets.

    Returns ``None`` when the brackets in ``body`` do not balance.
    """
    parts: list[str] = []
    stack: list[str] = []
    start = 0
    for index, char in enumerate(body):
        if char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                return None
        elif char == "," and not stack:
            parts.append(body[start:index])
            start = index + 1
    if stack:
        return None
    parts.append(body[start:])
    return [part.strip() for part in parts if part.strip()]


def _decorator_properties(masked: str, marker: re.Match[str]) -> dict[str, str]:
    """Map each top-level property of the decorator object to its raw value."""
    open_index = marker.end() - 1
    close_index = _matching_close(masked, open_index)
    if close_index is None:
        logger.debug("unbalanced @Module( decorator; fields default to empty")
        return {}

    argument = masked[open_index + 1 : close_index].strip()
    if not (argument.startswith("{") and argument.endswith("}")):
        return {}

    entries = _split_top_level(argument[1:-1])
    if entries is None:
        return {}

    properties: dict[str, str] = {}
    for entry in entries:
        key_match = _PROPERTY_KEY.match(entry)
        if key_match:
            properties[key_match.group(1)] = entry[key_match.end() :].strip()
    return properties


def _list_entries(value: str | None) -> list[str]:
    """Top-level entries of a bracketed list value, or [] when malformed."""
    if not value or not (value.startswith("[") and value.endswith("]")):
        return []
    return _split_top_level(value[1:-1]) or []


def _entry_reference(entry: str) -> str | None:
    """Name the reference an entry points at, dropping call-style suffixes.

    ``TypeOrmModule.forFeature([User])`` names ``TypeOrmModule`` and
    ``forwardRef(() => UsersModule)`` names ``UsersModule``.
    """
    forward = _FORWARD_REF.match(entry)
    if forward:
        return forward.group(1)
    leading = _LEADING_REFERENCE.match(entry)
    return leading.group(1) if leading else None


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def _extract_imports(
    value: str | None, deny: frozenset[str], own_name: str
) -> tuple[str, ...]:
    references = (_entry_reference(entry) for entry in _list_entries(value))
    return _unique(
        ref for ref in references if ref and ref not in deny and ref != own_name
    )


def _extract_exports(value: str | None) -> tuple[str, ...]:
    references = (_entry_reference(entry) for entry in _list_entries(value))
    return _unique(ref for ref in references if ref)


def _extract_suffixed(value: str | None, suffixes: tuple[str, ...]) -> tuple[str, ...]:
    if not value or not value.startswith("["):
        return ()
    if _matching_close(value, 0) != len(value) - 1:
        return ()
    return _unique(
        ident
        for ident in _IDENTIFIER.findall(value)
        if any(
            ident.endswith(suffix) and len(ident) > len(suffix) for suffix in suffixes
        )
    )


def extract_module(
    source_path: str,
    text: str,
    *,
    name: str | None = None,
    rules: ExtractionRules | None = None,
    use_class_name: bool = False,
) -> ModuleNode | None:
    """Extract a ModuleNode from the raw text of one module document.

    Args:
        source_path: Origin of the document, kept for diagnostics
        text: Raw document text
        name: Module name; derived from ``source_path`` when omitted
        rules: Extraction heuristics (defaults when omitted)
        use_class_name: Prefer the decorated class name over ``name``

    Returns:
        The extracted node, or None when the text holds no ``@Module``
        declaration. Fields that cannot be extracted are left empty.
    """
    rules = rules or ExtractionRules()
    masked = _mask_literals(text)
    marker = _MODULE_MARKER.search(masked)
    if marker is None:
        logger.debug("no module declaration in %s", source_path)
        return None

    module_name = name if name is not None else path_to_module_name(source_path)
    if use_class_name:
        class_match = _CLASS_DECL.search(masked, marker.end())
        if class_match:
            module_name = class_match.group(1)
    if not module_name:
        logger.warning("cannot derive a module name for %s; skipping", source_path)
        return None

    properties = _decorator_properties(masked, marker)
    deny = IMPORT_DENY_LIST | frozenset(rules.ignored_imports)

    node = ModuleNode(
        name=module_name,
        source_path=source_path,
        imports=_extract_imports(properties.get("imports"), deny, module_name),
        exports=_extract_exports(properties.get("exports")),
        providers=_extract_suffixed(
            properties.get("providers"), rules.provider_suffixes
        ),
        controllers=_extract_suffixed(
            properties.get("controllers"), rules.controller_suffixes
        ),
    )
    logger.debug(
        "extracted %s from %s: %d imports, %d providers",
        node.name,
        source_path,
        len(node.imports),
        len(node.providers),
    )
    return node


__all__ = ["IMPORT_DENY_LIST", "extract_module"]
