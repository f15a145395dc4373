"""
Section editor base classes.

Editors hold no content of their own: they read the current block from the
BlockStore, build a new content record and write it back with
update_block_content. An editor therefore never observes stale content, and a
failed operation (validation or AI service) leaves the store untouched.
"""

from contextlib import contextmanager
from typing import Any, ClassVar, Hashable, Iterator, List, Mapping, Optional, Tuple

from vita.contexts.assist.service import (
    ImprovementRequest,
    ImprovementResponse,
    TextImprovementService,
)
from vita.contexts.editing.block_store import BlockStore
from vita.contexts.editing.blocks import (
    BlockContent,
    BlockType,
    ContentItem,
    Direction,
    ItemListContent,
    parse_direction,
)
from vita.contexts.editing.exceptions import NotFoundError, ServiceError, ValidationError
from vita.contexts.editing.logger import _log_debug, _log_info, log_assist_failure


class InFlightGuard:
    """
    Tracks AI-assist calls in progress.

    A target (a whole block, or one item of a block) cannot be sent to the
    service again until its pending call finishes; other targets stay available.
    """

    def __init__(self):
        self._pending = set()

    @property
    def pending(self) -> frozenset:
        return frozenset(self._pending)

    def is_pending(self, key: Hashable) -> bool:
        return key in self._pending

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        if key in self._pending:
            raise ValidationError(f"An AI-assist request for {key} is already in progress")
        self._pending.add(key)
        try:
            yield
        finally:
            self._pending.discard(key)


class SectionEditor:
    """
    Common shape of all section editors.

    Args:
        store: BlockStore holding the edited block
        assist: AI text service (None disables AI-assist)
        guard: Shared in-flight tracker (one per editing session)
    """

    block_type: ClassVar[BlockType]

    def __init__(
        self,
        store: BlockStore,
        assist: Optional[TextImprovementService] = None,
        guard: Optional[InFlightGuard] = None,
    ):
        self.store = store
        self.assist = assist
        self.guard = guard or InFlightGuard()

    @property
    def content(self) -> BlockContent:
        return self.store.content_of(self.block_type)

    def is_busy(self, target: Hashable = None) -> bool:
        """Whether an AI-assist call for this block (or one of its items) is pending."""
        return self.guard.is_pending((self.block_type, target))

    def missing_required_fields(self) -> List[str]:
        """Human-readable list of required fields left blank."""
        return []

    def _write(self, content: BlockContent) -> None:
        self.store.update_block_content(self.block_type, content)

    def _request_rewrite(
        self,
        source_text: str,
        target: Hashable = None,
        target_role: Optional[str] = None,
        job_description: Optional[str] = None,
    ) -> ImprovementResponse:
        """Send one request to the AI service; the caller has already validated the source."""
        if self.assist is None:
            raise ServiceError("AI-assist is not configured for this session")

        label = "block" if target is None else f"item {target}"
        with self.guard.hold((self.block_type, target)):
            try:
                return self.assist.improve(
                    ImprovementRequest(
                        block_type=self.block_type,
                        source_text=source_text,
                        target_role=target_role or None,
                        job_description=job_description or None,
                    )
                )
            except ServiceError as e:
                log_assist_failure(self.block_type.value, label, e)
                raise


class ListSectionEditor(SectionEditor):
    """
    Editor for blocks whose content is an ordered item list.

    Item operations mirror the BlockStore's structural ones, applied to the
    content array: remove shifts later items up, move swaps neighbours and is a
    no-op at either end.
    """

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()
    ITEM_PLACEHOLDER: ClassVar[str] = "New Item"
    ITEM_TITLE_FIELD: ClassVar[str] = "title"

    @property
    def content(self) -> ItemListContent:
        return self.store.content_of(self.block_type)

    @property
    def items(self) -> Tuple[ContentItem, ...]:
        return self.content.items

    def item(self, index: int) -> ContentItem:
        return self.items[self._check_index(index)]

    def add_item(self, **fields: Any) -> int:
        """
        Append a new item (blank unless fields are given).

        Returns:
            Index of the new item
        """
        content = self.content
        item = content.item_class().with_fields(fields) if fields else content.item_class()
        self._write(content.with_items(content.items + (item,)))
        _log_debug(f"{self.block_type.value}: added item {len(content.items)}")
        return len(content.items)

    def remove_item(self, index: int) -> ContentItem:
        content = self.content
        index = self._check_index(index)
        removed = content.items[index]
        self._write(content.with_items(content.items[:index] + content.items[index + 1 :]))
        _log_debug(f"{self.block_type.value}: removed item {index}")
        return removed

    def move_item(self, index: int, direction) -> bool:
        """
        Swap an item with its neighbour.

        Returns:
            True if moved, False at a boundary
        """
        direction = parse_direction(direction)
        content = self.content
        index = self._check_index(index)
        target = index - 1 if direction is Direction.UP else index + 1
        if target < 0 or target >= len(content.items):
            return False

        items = list(content.items)
        items[index], items[target] = items[target], items[index]
        self._write(content.with_items(items))
        return True

    def update_item_field(self, index: int, field: str, value: Any) -> ContentItem:
        """
        Set one field of an item.

        Setting `current` (or `noExpiration` for certifications) to True also
        clears the paired end date in the same update.
        """
        return self.update_item_fields(index, {field: value})

    def update_item_fields(self, index: int, changes: Mapping[str, Any]) -> ContentItem:
        """Apply several field changes to one item as a single transition."""
        content = self.content
        index = self._check_index(index)
        updated = content.items[index].with_fields(changes)
        items = list(content.items)
        items[index] = updated
        self._write(content.with_items(items))
        return updated

    def improve_with_ai(self, index: int, target_role: Optional[str] = None) -> str:
        """
        Rewrite an item's description with the AI service.

        Raises:
            ValidationError: If the description is blank (no request is sent)
            ServiceError: If the service fails (content unchanged)

        Returns:
            The improved text now stored on the item
        """
        item = self.item(index)
        field = item.IMPROVABLE_FIELD
        source = item.get(field)
        if not source.strip():
            raise ValidationError(f"Nothing to improve: {self.block_type.value} item {index} has no {field}")

        response = self._request_rewrite(source, target=index, target_role=target_role)
        if not response.improved_text:
            raise ServiceError(f"AI returned no {field} for {self.block_type.value} item {index}")

        self.update_item_field(index, field, response.improved_text)
        _log_info(f"{self.block_type.value}: item {index} {field} rewritten")
        return response.improved_text

    def item_label(self, index: int) -> str:
        """Panel label for an item, falling back to a placeholder for blank titles."""
        return self.item(index).get(self.ITEM_TITLE_FIELD) or self.ITEM_PLACEHOLDER

    def missing_required_fields(self) -> List[str]:
        missing = []
        for index, item in enumerate(self.items):
            for field in self.REQUIRED_FIELDS:
                if not str(item.get(field)).strip():
                    missing.append(f"{self.block_type.value}[{index}].{field}")
        return missing

    def _check_index(self, index: int) -> int:
        count = len(self.content.items)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < count:
            raise NotFoundError(f"{self.block_type.value} item", index)
        return index
