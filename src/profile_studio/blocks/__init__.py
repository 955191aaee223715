"""Block intermediate representation shared by the markdown and preview outputs."""

from profile_studio.blocks.builders import BlockBuilder
from profile_studio.blocks.models import (
    BLOCK_KINDS,
    BLOCK_TYPES,
    Block,
    BlockBase,
    ListItem,
    ensure_exhaustive,
    iter_blocks,
)

__all__ = [
    "BLOCK_KINDS",
    "BLOCK_TYPES",
    "Block",
    "BlockBase",
    "BlockBuilder",
    "ListItem",
    "ensure_exhaustive",
    "iter_blocks",
]
