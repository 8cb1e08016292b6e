"""Style presets used to lay out the graph."""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from gitgraph_layout.core.errors import UnknownTemplateError


class TemplateName(str, Enum):
    """Name of a built-in template."""

    METRO = "metro"
    BLACK_ARROW = "blackarrow"


class BranchStyle(BaseModel):
    """Branch styling: lane spacing, line width and an optional color."""

    color: Optional[str] = None
    line_width: float = 2
    spacing: float = 20


class CommitTemplateStyle(BaseModel):
    """Commit styling shared by all commits of a template."""

    spacing: float = 25
    dot_size: float = 3


DEFAULT_COLORS = ["#6963FF", "#47E8D4", "#6BDB52", "#E84BA5", "#FFA657"]


class Template(BaseModel):
    """Spacing and palette applied to a whole graph."""

    colors: List[str] = DEFAULT_COLORS
    branch: BranchStyle = BranchStyle()
    commit: CommitTemplateStyle = CommitTemplateStyle()


METRO_TEMPLATE = Template(
    colors=["#979797", "#008fb5", "#f1c109"],
    branch=BranchStyle(line_width=10, spacing=50),
    commit=CommitTemplateStyle(spacing=80, dot_size=14),
)

BLACK_ARROW_TEMPLATE = Template(
    colors=["#6963FF", "#47E8D4", "#6BDB52", "#E84BA5", "#FFA657"],
    branch=BranchStyle(line_width=4, spacing=50),
    commit=CommitTemplateStyle(spacing=60, dot_size=16),
)

_TEMPLATES: Dict[TemplateName, Template] = {
    TemplateName.METRO: METRO_TEMPLATE,
    TemplateName.BLACK_ARROW: BLACK_ARROW_TEMPLATE,
}


def _resolve_name(name: Union[TemplateName, str]) -> TemplateName:
    try:
        return TemplateName(name)
    except ValueError as e:
        raise UnknownTemplateError(str(name)) from e


def get_template(template: Union[None, str, TemplateName, Template] = None) -> Template:
    """Resolve a template name or instance; metro is the default."""
    if template is None:
        return METRO_TEMPLATE.model_copy(deep=True)
    if isinstance(template, Template):
        return template
    return _TEMPLATES[_resolve_name(template)].model_copy(deep=True)


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def template_extend(
    name: Union[str, TemplateName], overrides: Dict[str, Any]
) -> Template:
    """Build a template from a preset with some values overridden.

    `overrides` mirrors the template structure, e.g.
    ``{"branch": {"spacing": 30}, "colors": ["red", "blue"]}``.
    """
    base = _TEMPLATES[_resolve_name(name)].model_dump()
    return Template.model_validate(_deep_merge(base, overrides))
