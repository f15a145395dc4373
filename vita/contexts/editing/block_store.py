"""
Block Store

In-memory structural-mutation authority for one document's block list.

Blocks live in a single list whose position *is* the order: every structural
operation rebuilds the list and re-derives `order` from position, so the order
values are always the dense sequence 0..n-1. Each operation validates its
arguments before touching the list and then swaps in the new list in one
assignment, so a rejected call leaves nothing half-applied.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from vita.contexts.editing.blocks import (
    CONTENT_TYPES,
    Block,
    BlockContent,
    BlockType,
    Direction,
    content_from_dict,
    default_content,
    parse_block_type,
    parse_direction,
)
from vita.contexts.editing.exceptions import DuplicateTypeError, NotFoundError, ValidationError
from vita.contexts.editing.logger import _log_debug, _log_warning, log_structure_change


class BlockStore:
    """
    Ordered block list for one document, with at most one block per type.

    Example:
        >>> store = BlockStore()
        >>> _ = store.add_block("summary")
        >>> _ = store.add_block("skills")
        >>> store.move_block("skills", "up")
        True
        >>> [b.block_type.value for b in store.blocks]
        ['skills', 'summary']
    """

    def __init__(self, blocks: Iterable[Block] = ()):
        blocks = list(blocks)
        seen = set()
        for block in blocks:
            if block.block_type in seen:
                raise DuplicateTypeError(block.block_type.value)
            seen.add(block.block_type)
        self._blocks: List[Block] = self._renumber(blocks)

    # --- Read API ---

    @property
    def blocks(self) -> Tuple[Block, ...]:
        """Blocks in ascending order."""
        return tuple(self._blocks)

    @property
    def types(self) -> Tuple[BlockType, ...]:
        return tuple(block.block_type for block in self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(tuple(self._blocks))

    def has_block(self, block_type) -> bool:
        return self._index_of(parse_block_type(block_type)) is not None

    def get_block(self, block_type) -> Block:
        block_type = parse_block_type(block_type)
        index = self._require_index(block_type)
        return self._blocks[index]

    def content_of(self, block_type) -> BlockContent:
        return self.get_block(block_type).content

    # --- Structural operations ---

    def add_block(self, block_type) -> Block:
        """
        Append a block of the given type with default (empty) content.

        Raises:
            DuplicateTypeError: If a block of this type already exists
        """
        block_type = parse_block_type(block_type)
        if self._index_of(block_type) is not None:
            raise DuplicateTypeError(block_type.value)

        block = Block(block_type=block_type, content=default_content(block_type))
        self._commit(self._blocks + [block], "add", block_type)
        return self._blocks[-1]

    def remove_block(self, block_type) -> Block:
        """
        Remove a block; later blocks move up one position.

        Clearing or re-targeting any editor selection that pointed at the removed
        block is the caller's job (see EditingSession).

        Raises:
            NotFoundError: If no block of this type exists
        """
        block_type = parse_block_type(block_type)
        index = self._require_index(block_type)
        removed = self._blocks[index]
        self._commit(self._blocks[:index] + self._blocks[index + 1 :], "remove", block_type)
        return removed

    def toggle_block(self, block_type) -> bool:
        """Remove the block if present, add it otherwise. Returns True if now present."""
        block_type = parse_block_type(block_type)
        if self._index_of(block_type) is None:
            self.add_block(block_type)
            return True
        self.remove_block(block_type)
        return False

    def move_block(self, block_type, direction) -> bool:
        """
        Swap a block with its neighbour.

        Moving the first block up or the last block down is a no-op.

        Args:
            block_type: Block to move
            direction: Direction.UP / Direction.DOWN or "up" / "down"

        Returns:
            True if the block moved, False for a boundary no-op

        Raises:
            NotFoundError: If no block of this type exists
            ValidationError: If direction is not up/down
        """
        block_type = parse_block_type(block_type)
        direction = parse_direction(direction)
        index = self._require_index(block_type)
        target = index - 1 if direction is Direction.UP else index + 1

        if target < 0 or target >= len(self._blocks):
            _log_debug(f"move {block_type.value} {direction.value}: already at boundary")
            return False

        blocks = list(self._blocks)
        blocks[index], blocks[target] = blocks[target], blocks[index]
        self._commit(blocks, f"move {direction.value}", block_type)
        return True

    def update_block_content(self, block_type, content: BlockContent) -> Block:
        """
        Replace a block's content wholesale.

        Raises:
            NotFoundError: If no block of this type exists
            ValidationError: If content is not this block type's content record
        """
        block_type = parse_block_type(block_type)
        index = self._require_index(block_type)
        expected = CONTENT_TYPES[block_type]
        if type(content) is not expected:
            raise ValidationError(
                f"{block_type.value} content must be {expected.__name__}, "
                f"got {type(content).__name__}"
            )

        blocks = list(self._blocks)
        blocks[index] = replace(blocks[index], content=content)
        self._blocks = blocks
        return blocks[index]

    def reorder_from_scratch(self, ordered_types: Sequence) -> None:
        """
        Re-derive the whole order from an explicit sequence of types.

        Args:
            ordered_types: Every present block type exactly once, in the new order

        Raises:
            ValidationError: If the sequence is not a permutation of the present types
        """
        requested = [parse_block_type(t) for t in ordered_types]
        if len(set(requested)) != len(requested):
            raise ValidationError(f"Block types repeated in new order: {[t.value for t in requested]}")
        if set(requested) != set(self.types):
            raise ValidationError(
                f"New order must list exactly the present blocks "
                f"({[t.value for t in self.types]}), got {[t.value for t in requested]}"
            )

        by_type = {block.block_type: block for block in self._blocks}
        self._commit([by_type[t] for t in requested], "reorder", None)

    # --- Serialization ---

    def to_records(self) -> List[Dict[str, Any]]:
        """Ordered list of {type, content, order} records."""
        return [block.to_record() for block in self._blocks]

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "BlockStore":
        """
        Build a store from persisted block records whose order is untrusted.

        Stored `order` values are honoured only when every record carries a
        distinct non-negative integer; the sequence is then densified. Otherwise
        the array position decides.

        Raises:
            ValidationError: Malformed record or unknown block type
            DuplicateTypeError: Two records of the same type
        """
        parsed = []
        for position, record in enumerate(records):
            if not isinstance(record, Mapping) or "type" not in record:
                raise ValidationError(f"Block record {position} has no 'type': {record!r}")
            block_type = parse_block_type(record["type"])
            content = content_from_dict(block_type, record.get("content"))
            parsed.append((record.get("order"), position, Block(block_type, content)))

        stored_orders = [order for order, _, _ in parsed]
        trusted = all(
            isinstance(order, int) and not isinstance(order, bool) and order >= 0
            for order in stored_orders
        ) and len(set(stored_orders)) == len(stored_orders)

        if trusted:
            parsed.sort(key=lambda entry: entry[0])
        elif parsed:
            _log_warning(f"Stored block order {stored_orders} is ambiguous; using array position")

        return cls(block for _, _, block in parsed)

    # --- Internals ---

    def _index_of(self, block_type: BlockType) -> Optional[int]:
        for index, block in enumerate(self._blocks):
            if block.block_type is block_type:
                return index
        return None

    def _require_index(self, block_type: BlockType) -> int:
        index = self._index_of(block_type)
        if index is None:
            raise NotFoundError("block", block_type.value)
        return index

    @staticmethod
    def _renumber(blocks: List[Block]) -> List[Block]:
        return [
            block if block.order == position else replace(block, order=position)
            for position, block in enumerate(blocks)
        ]

    def _commit(self, blocks: List[Block], operation: str, block_type: Optional[BlockType]) -> None:
        self._blocks = self._renumber(blocks)
        log_structure_change(
            operation,
            block_type.value if block_type else "*",
            [t.value for t in self.types],
        )
