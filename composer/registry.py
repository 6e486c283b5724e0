# composer/registry.py
"""
Block type registry.

Block types are registered once (by ``composer.blocks`` when the app is
ready) and only read during conversion. Each block type declares its
attributes and the transforms that create it from raw HTML or shortcodes.
"""

from __future__ import annotations

import copy
import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from bs4 import Tag

from .exceptions import BlockTypeNotRegistered, BlockTypeRegistrationError

logger = logging.getLogger(__name__)

_BLOCK_NAME = re.compile(r"^[a-z][a-z0-9-]*/[a-z][a-z0-9-]*$")


@dataclass
class Block:
    """One structured, named piece of content."""

    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    inner_blocks: List["Block"] = field(default_factory=list)
    client_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class RawTransform:
    """
    Creates a block from a top-level HTML element.

    ``selector`` or ``is_match`` decide which elements the transform claims,
    ``schema`` says what markup survives sanitizing, and ``transform`` builds
    the block from the element and the registry converting it.

    Without ``transform`` the block is built generically from the element's
    HTML and ``block_name``'s attribute definitions.
    """

    block_name: str = ""
    selector: Optional[str] = None
    is_match: Optional[Callable[[Tag], bool]] = None
    schema: Dict[str, dict] = field(default_factory=dict)
    transform: Optional[Callable[[Tag, "BlockRegistry"], Block]] = None

    def matches(self, node: Tag) -> bool:
        if self.is_match is not None:
            return bool(self.is_match(node))
        if self.selector:
            return bool(node.css.match(self.selector))
        return False


@dataclass
class ShortcodeTransform:
    """
    Creates a block from a shortcode such as ``[gallery ids="1,2"]``.

    ``attributes`` maps block attribute names to callables receiving the
    shortcode's attributes and the match.
    """

    block_name: str = ""
    tag: Union[str, List[str]] = ""
    attributes: Dict[str, Callable] = field(default_factory=dict)

    @property
    def tags(self) -> List[str]:
        return [self.tag] if isinstance(self.tag, str) else list(self.tag)


@dataclass
class BlockType:
    name: str
    title: str = ""
    attributes: Dict[str, dict] = field(default_factory=dict)
    raw_transforms: List[RawTransform] = field(default_factory=list)
    shortcode_transforms: List[ShortcodeTransform] = field(default_factory=list)

    def __post_init__(self):
        for transform in self.raw_transforms + self.shortcode_transforms:
            if not transform.block_name:
                transform.block_name = self.name


class BlockRegistry:
    """Registered block types, in registration order."""

    def __init__(self):
        self._block_types: Dict[str, BlockType] = {}

    def register(self, block_type: BlockType) -> BlockType:
        if not _BLOCK_NAME.match(block_type.name):
            raise BlockTypeRegistrationError(
                f"Block names must be namespaced, e.g. 'my-plugin/my-block', got '{block_type.name}'"
            )
        if block_type.name in self._block_types:
            raise BlockTypeRegistrationError(f"Block '{block_type.name}' is already registered")

        self._block_types[block_type.name] = block_type
        logger.debug(f"Registered block type '{block_type.name}'")
        return block_type

    def unregister(self, name: str) -> BlockType:
        try:
            return self._block_types.pop(name)
        except KeyError:
            raise BlockTypeNotRegistered(f"Block '{name}' is not registered") from None

    def get_block_type(self, name: str) -> Optional[BlockType]:
        return self._block_types.get(name)

    def get_block_types(self) -> List[BlockType]:
        return list(self._block_types.values())

    def get_raw_transforms(self) -> List[RawTransform]:
        """All raw transforms; earlier ones shadow later ones when matching."""
        return [
            transform
            for block_type in self._block_types.values()
            for transform in block_type.raw_transforms
        ]

    def get_shortcode_transforms(self) -> List[ShortcodeTransform]:
        return [
            transform
            for block_type in self._block_types.values()
            for transform in block_type.shortcode_transforms
        ]

    def create_block(
        self,
        name: str,
        attributes: Optional[Dict[str, Any]] = None,
        inner_blocks: Optional[List[Block]] = None,
    ) -> Block:
        """
        Create a block of a registered type.

        Only attributes the block type defines are kept; missing ones take the
        definition's default when it has one.
        """
        block_type = self.get_block_type(name)
        if block_type is None:
            raise BlockTypeNotRegistered(f"Block '{name}' is not registered")

        attributes = attributes or {}
        sanitized = {}
        for key, definition in block_type.attributes.items():
            value = attributes.get(key)
            if value is None and "default" in definition:
                value = copy.deepcopy(definition["default"])
            if value is not None:
                sanitized[key] = value

        return Block(name=name, attributes=sanitized, inner_blocks=list(inner_blocks or []))


registry = BlockRegistry()


def register_block_type(block_type: BlockType) -> BlockType:
    return registry.register(block_type)


def create_block(name, attributes=None, inner_blocks=None) -> Block:
    return registry.create_block(name, attributes, inner_blocks)
