"""
Templating Registries

Centralized registries for loading and caching HTML templates and template layouts.

Each template lives in its own directory under VITA_TEMPLATES_PATH:
    template/{template_id}/document.html.jinja   HTML preview
    template/{template_id}/layout.yaml           headings, labels, default header
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound
from omegaconf import OmegaConf

from vita.contexts.editing.blocks import BlockType
from vita.contexts.templating.logger import _log_debug

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("VITA_TEMPLATES_PATH", str(Path(__file__).parent / "template"))
)
PROFILE_PATH = os.getenv("VITA_PROFILE_PATH")

DEFAULT_TEMPLATE_ID = "classic"


def available_templates(templates_path: Path = None) -> List[str]:
    """Template ids under templates_path that ship a layout.yaml."""
    root = Path(templates_path) if templates_path is not None else TEMPLATES_PATH
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if (p / "layout.yaml").is_file())


@dataclass(frozen=True)
class TemplateLayout:
    """
    Static text a template wraps around the document's blocks.

    Attributes:
        template_id: Template directory name
        name: Header name line
        contact: Header contact line (selected contact fields joined by separator)
        headings: Section heading per block type
        labels: Fixed labels ("(Link)", "GPA:", ...)
    """

    template_id: str
    name: str
    contact: str
    headings: Dict[BlockType, str]
    labels: Dict[str, str] = field(default_factory=dict)

    def heading(self, block_type: BlockType) -> str:
        return self.headings[block_type]

    def label(self, key: str) -> str:
        return self.labels[key]


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 HTML templates.

    Templates are stored in {templates_path}/{template_id}/document.html.jinja and
    rendered with autoescaping, so user content never becomes markup.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Base path for template directories. Defaults to
                           VITA_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, template_id: str) -> Template:
        """
        Get a template by id, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_id in self._cache:
            return self._cache[template_id]

        template_path = f"{template_id}/document.html.jinja"

        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{template_id}' at {self.templates_path / template_path}"
            ) from e

        self._cache[template_id] = template
        return template

    def get_template_path(self, template_id: str) -> Path:
        return self.templates_path / template_id / "document.html.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_id: str) -> bool:
        return template_id in self._cache


class LayoutRegistry:
    """
    Registry for loading and caching template layouts.

    The header in layout.yaml is placeholder text; a user profile YAML (name,
    contact_selection, contact_registry) overrides whichever keys it defines.
    """

    def __init__(self, templates_path: Path = None, profile_path: Optional[Path] = None):
        if templates_path is None:
            templates_path = TEMPLATES_PATH
        if profile_path is None and PROFILE_PATH:
            profile_path = Path(PROFILE_PATH)

        self.templates_path = Path(templates_path)
        self.profile_path = Path(profile_path) if profile_path else None
        self._cache: Dict[str, TemplateLayout] = {}

    def get_layout(self, template_id: str = DEFAULT_TEMPLATE_ID) -> TemplateLayout:
        """
        Get a layout by template id, loading and caching it if necessary.

        Raises:
            FileNotFoundError: If layout.yaml (or the configured profile) doesn't exist
            ValueError: If the layout is missing a heading or a selected contact field
        """
        if template_id in self._cache:
            return self._cache[template_id]

        config_path = self.get_layout_path(template_id)
        if not config_path.exists():
            raise FileNotFoundError(f"Layout not found for template '{template_id}' at {config_path}")

        # resolve=False: "${...}" in user text is literal, not an interpolation
        config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=False)
        header = dict(config.get("header") or {})

        if self.profile_path is not None:
            if not self.profile_path.exists():
                raise FileNotFoundError(f"User profile not found at {self.profile_path}")
            profile = load_profile(self.profile_path)
            header.update({k: v for k, v in profile.items() if k in _HEADER_KEYS})
            _log_debug(f"Header overridden from profile {self.profile_path}")

        layout = TemplateLayout(
            template_id=template_id,
            name=str(header.get("name") or ""),
            contact=_contact_line(header),
            headings=_headings(config.get("headings") or {}, config_path),
            labels={str(k): str(v) for k, v in (config.get("labels") or {}).items()},
        )
        self._cache[template_id] = layout
        return layout

    def get_layout_path(self, template_id: str) -> Path:
        return self.templates_path / template_id / "layout.yaml"

    def clear_cache(self):
        """Clear the layout cache."""
        self._cache.clear()

    def is_cached(self, template_id: str) -> bool:
        return template_id in self._cache


_HEADER_KEYS = ("name", "contact_selection", "contact_registry", "separator")


def load_profile(profile_path: Path) -> Dict[str, Any]:
    """Load a user profile YAML as a plain dict."""
    profile = OmegaConf.to_container(OmegaConf.load(profile_path), resolve=False)
    if not isinstance(profile, dict):
        raise ValueError(f"User profile must be a mapping: {profile_path}")
    return profile


def _contact_line(header: Mapping[str, Any]) -> str:
    selection = list(header.get("contact_selection") or [])
    registry = dict(header.get("contact_registry") or {})
    separator = str(header.get("separator", " | "))

    values = []
    for field_name in selection:
        if field_name not in registry:
            raise ValueError(
                f"Contact field '{field_name}' not found in contact registry. "
                f"Available: {sorted(registry)}"
            )
        value = str(registry[field_name] or "").strip()
        if value:
            values.append(value)
    return separator.join(values)


def _headings(raw: Mapping[str, Any], config_path: Path) -> Dict[BlockType, str]:
    missing: Tuple[str, ...] = tuple(t.value for t in BlockType if t.value not in raw)
    if missing:
        raise ValueError(f"Layout {config_path} has no heading for: {', '.join(missing)}")
    return {t: str(raw[t.value]) for t in BlockType}
