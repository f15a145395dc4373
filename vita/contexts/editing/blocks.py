"""
Resume Block Model

Defines the six block variants a resume document is built from and their content
records. All records are frozen dataclasses: editors never mutate content in
place, they build a new record and hand it to the BlockStore.

Wire format (persistence, editor field names) keeps the original camelCase keys:
    {"type": "experience", "order": 2, "content": {"items": [{"jobTitle": ...}]}}
"""

from dataclasses import Field, dataclass, field, fields, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Type

from vita.contexts.editing.exceptions import ValidationError


class BlockType(str, Enum):
    """Closed set of block variants. Declaration order is the default document order."""

    SUMMARY = "summary"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    PROJECT = "project"
    CERTIFICATION = "certification"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


def parse_block_type(value) -> BlockType:
    """Coerce a BlockType or its string tag, rejecting unknown tags."""
    try:
        return BlockType(value)
    except ValueError:
        valid = ", ".join(t.value for t in BlockType)
        raise ValidationError(f"Unknown block type '{value}'. Valid types: {valid}") from None


def parse_direction(value) -> Direction:
    """Coerce a Direction or "up"/"down"."""
    try:
        return Direction(value)
    except ValueError:
        raise ValidationError(f"Direction must be 'up' or 'down', got: {value!r}") from None


def ensure_covers_all_types(table: Mapping[BlockType, Any], table_name: str) -> None:
    """
    Verify a per-type dispatch table handles every BlockType.

    Called at import time by every module that dispatches on block type, so a new
    variant without a handler fails on import instead of at render/edit time.

    Raises:
        TypeError: If the table is missing a type or has unknown keys
    """
    missing = [t.value for t in BlockType if t not in table]
    extra = [str(k) for k in table if not isinstance(k, BlockType)]
    if missing or extra:
        raise TypeError(
            f"{table_name} must map every BlockType exactly "
            f"(missing: {missing or 'none'}, unexpected: {extra or 'none'})"
        )


def _wire(name: str, default: Any = "") -> Any:
    """Dataclass field whose wire key differs from the attribute name."""
    return field(default=default, metadata={"wire": name})


def _wire_key(f: Field) -> str:
    return f.metadata.get("wire", f.name)


# --- Content items (entries inside list-content blocks) ---


@dataclass(frozen=True)
class ContentItem:
    """
    One entry of a list-content block (a job, a degree, a project, a certificate).

    Subclasses declare END_DATE_FLAG = (flag_field, end_date_field) when a boolean
    flag makes the end date meaningless. The pairing is enforced on every
    construction, so no sequence of field updates can leave both set.
    """

    END_DATE_FLAG: ClassVar[Optional[Tuple[str, str]]] = None
    IMPROVABLE_FIELD: ClassVar[str] = "description"

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(f.default, bool):
                if not isinstance(value, bool):
                    raise ValidationError(f"{_wire_key(f)} must be true or false, got: {value!r}")
            elif value is None:
                object.__setattr__(self, f.name, "")
            elif not isinstance(value, str):
                raise ValidationError(f"{_wire_key(f)} must be text, got: {value!r}")

        if self.END_DATE_FLAG is not None:
            flag_name, end_name = self.END_DATE_FLAG
            if getattr(self, flag_name) and getattr(self, end_name):
                object.__setattr__(self, end_name, "")

    @classmethod
    def resolve_field(cls, name: str) -> str:
        """Map a wire key or attribute name to the attribute name."""
        for f in fields(cls):
            if name in (f.name, _wire_key(f)):
                return f.name
        valid = ", ".join(_wire_key(f) for f in fields(cls))
        raise ValidationError(f"Unknown field '{name}' for {cls.__name__}. Valid fields: {valid}")

    def with_fields(self, changes: Mapping[str, Any]) -> "ContentItem":
        """
        Apply several field changes as one transition.

        Args:
            changes: Field name (wire key or attribute name) -> new value

        Returns:
            New item with the changes applied and the end-date pairing enforced

        Raises:
            ValidationError: Unknown field or wrong value type (nothing is applied)
        """
        resolved = {self.resolve_field(name): value for name, value in changes.items()}
        return replace(self, **resolved)

    def get(self, name: str) -> Any:
        return getattr(self, self.resolve_field(name))

    def to_dict(self) -> Dict[str, Any]:
        return {_wire_key(f): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContentItem":
        """Build from a wire dict; missing keys take defaults, unknown keys are ignored."""
        kwargs = {}
        for f in fields(cls):
            key = _wire_key(f)
            if key in data:
                value = data[key]
            elif f.name in data:
                value = data[f.name]
            else:
                continue
            if isinstance(f.default, bool):
                value = value is True or str(value).lower() == "true"
            elif value is not None and not isinstance(value, str):
                value = str(value)
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class ExperienceItem(ContentItem):
    END_DATE_FLAG: ClassVar[Optional[Tuple[str, str]]] = ("current", "end_date")

    job_title: str = _wire("jobTitle")
    company: str = ""
    location: str = ""
    start_date: str = _wire("startDate")
    end_date: str = _wire("endDate")
    current: bool = False
    description: str = ""


@dataclass(frozen=True)
class EducationItem(ContentItem):
    END_DATE_FLAG: ClassVar[Optional[Tuple[str, str]]] = ("current", "end_date")

    degree: str = ""
    institution: str = ""
    location: str = ""
    start_date: str = _wire("startDate")
    end_date: str = _wire("endDate")
    current: bool = False
    gpa: str = ""
    description: str = ""


@dataclass(frozen=True)
class ProjectItem(ContentItem):
    END_DATE_FLAG: ClassVar[Optional[Tuple[str, str]]] = ("current", "end_date")

    title: str = ""
    technologies: str = ""
    start_date: str = _wire("startDate")
    end_date: str = _wire("endDate")
    current: bool = False
    description: str = ""
    link: str = ""


@dataclass(frozen=True)
class CertificationItem(ContentItem):
    END_DATE_FLAG: ClassVar[Optional[Tuple[str, str]]] = ("no_expiration", "expiration_date")

    name: str = ""
    issuer: str = ""
    date: str = ""
    expiration_date: str = _wire("expirationDate")
    no_expiration: bool = _wire("noExpiration", False)
    credential_id: str = _wire("credentialID")
    credential_url: str = _wire("credentialURL")
    description: str = ""


# --- Block content records ---


@dataclass(frozen=True)
class BlockContent:
    """Base for the per-type content records."""

    def is_empty(self) -> bool:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BlockContent":
        raise NotImplementedError


@dataclass(frozen=True)
class SummaryContent(BlockContent):
    text: str = ""

    def is_empty(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SummaryContent":
        text = data.get("text")
        return cls(text="" if text is None else str(text))


@dataclass(frozen=True)
class SkillsContent(BlockContent):
    """Ordered, duplicate-free list of skill strings."""

    skills: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "skills", tuple(dict.fromkeys(self.skills)))

    def is_empty(self) -> bool:
        return len(self.skills) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {"skills": list(self.skills)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkillsContent":
        raw = data.get("skills") or []
        return cls(skills=tuple(str(s).strip() for s in raw if s is not None and str(s).strip()))


@dataclass(frozen=True)
class ItemListContent(BlockContent):
    """Content made of an ordered list of items (order is the user's choice)."""

    item_class: ClassVar[Type[ContentItem]] = ContentItem

    items: Tuple[ContentItem, ...] = ()

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, self.item_class):
                raise ValidationError(
                    f"{type(self).__name__} items must be {self.item_class.__name__}, "
                    f"got {type(item).__name__}"
                )
        object.__setattr__(self, "items", items)

    def is_empty(self) -> bool:
        return len(self.items) == 0

    def with_items(self, items: Iterable[ContentItem]) -> "ItemListContent":
        return replace(self, items=tuple(items))

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ItemListContent":
        raw = data.get("items") or []
        return cls(items=tuple(cls.item_class.from_dict(i) for i in raw if isinstance(i, Mapping)))


@dataclass(frozen=True)
class ExperienceContent(ItemListContent):
    item_class: ClassVar[Type[ContentItem]] = ExperienceItem


@dataclass(frozen=True)
class EducationContent(ItemListContent):
    item_class: ClassVar[Type[ContentItem]] = EducationItem


@dataclass(frozen=True)
class ProjectContent(ItemListContent):
    item_class: ClassVar[Type[ContentItem]] = ProjectItem


@dataclass(frozen=True)
class CertificationContent(ItemListContent):
    item_class: ClassVar[Type[ContentItem]] = CertificationItem


CONTENT_TYPES: Dict[BlockType, Type[BlockContent]] = {
    BlockType.SUMMARY: SummaryContent,
    BlockType.SKILLS: SkillsContent,
    BlockType.EXPERIENCE: ExperienceContent,
    BlockType.EDUCATION: EducationContent,
    BlockType.PROJECT: ProjectContent,
    BlockType.CERTIFICATION: CertificationContent,
}
ensure_covers_all_types(CONTENT_TYPES, "CONTENT_TYPES")


def default_content(block_type: BlockType) -> BlockContent:
    """Empty content for a freshly added block."""
    return CONTENT_TYPES[parse_block_type(block_type)]()


def content_from_dict(block_type: BlockType, data: Optional[Mapping[str, Any]]) -> BlockContent:
    """Build typed content from its wire dict (None or non-dict -> default content)."""
    content_class = CONTENT_TYPES[parse_block_type(block_type)]
    if not isinstance(data, Mapping):
        return content_class()
    return content_class.from_dict(data)


@dataclass(frozen=True)
class Block:
    """
    One section of a resume document.

    Attributes:
        block_type: Variant tag, fixed for the block's lifetime
        content: Type-specific content record
        order: Position in the document (dense 0..n-1, maintained by BlockStore)
    """

    block_type: BlockType
    content: BlockContent
    order: int = 0

    def is_empty(self) -> bool:
        return self.content.is_empty()

    def to_record(self) -> Dict[str, Any]:
        return {
            "type": self.block_type.value,
            "content": self.content.to_dict(),
            "order": self.order,
        }


@dataclass(frozen=True)
class Document:
    """
    A resume: ordered blocks plus title/template metadata.

    Attributes:
        id: Storage identifier (None until first save)
        title: Document title, also used for the export filename
        template_id: Rendering template identifier
        blocks: Blocks in ascending order
    """

    id: Optional[str]
    title: str
    template_id: str = "classic"
    blocks: Tuple[Block, ...] = ()
