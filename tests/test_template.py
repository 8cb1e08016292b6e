"""Tests for templates and graph options."""

import pytest
from pydantic import ValidationError

from gitgraph_layout.core.errors import UnknownTemplateError
from gitgraph_layout.core.gitgraph import GitgraphCore, GitgraphOptions
from gitgraph_layout.models.template import (
    Template,
    TemplateName,
    get_template,
    template_extend,
)


def test_default_template_is_metro():
    """Test the default preset."""
    template = get_template()

    assert template.colors == ["#979797", "#008fb5", "#f1c109"]
    assert template.branch.spacing == 50
    assert template.commit.spacing == 80


def test_named_templates():
    """Test resolving presets by name or enum."""
    assert get_template("blackarrow").commit.spacing == 60
    assert get_template(TemplateName.METRO) == get_template()


def test_custom_template_is_used_as_is():
    """Test passing a template instance."""
    custom = Template(colors=["black"])

    assert get_template(custom) is custom
    assert custom.branch.spacing == 20
    assert custom.commit.spacing == 25


def test_unknown_template():
    """Test that unknown presets fail."""
    with pytest.raises(UnknownTemplateError) as excinfo:
        get_template("rainbow")

    assert excinfo.value.name == "rainbow"


def test_presets_are_not_shared():
    """Test that resolved presets can be changed without side effects."""
    template = get_template("metro")
    template.colors.append("#000000")

    assert len(get_template("metro").colors) == 3


def test_template_extend():
    """Test overriding part of a preset."""
    template = template_extend("metro", {"branch": {"spacing": 30}, "colors": ["a", "b"]})

    assert template.branch.spacing == 30
    assert template.branch.line_width == 10
    assert template.commit.spacing == 80
    assert template.colors == ["a", "b"]


def test_graph_options_defaults():
    """Test graph configuration defaults."""
    options = GitgraphOptions()

    assert options.orientation is None
    assert options.mode is None
    assert options.reverse_arrow is False
    assert options.init_commit_offset_x == 0
    assert options.init_commit_offset_y == 0


def test_graph_options_validation():
    """Test that invalid options are rejected."""
    with pytest.raises(ValidationError):
        GitgraphOptions(orientation="diagonal")
    with pytest.raises(ValidationError):
        GitgraphOptions(mode="sparse")


def test_graph_resolves_template_once():
    """Test template resolution at construction."""
    gitgraph = GitgraphCore(template="blackarrow", orientation="horizontal")

    assert gitgraph.template.commit.spacing == 60
    assert not gitgraph.is_vertical
    assert gitgraph.get_rendered_data().commit_messages_x == 0

    with pytest.raises(UnknownTemplateError):
        GitgraphCore(template="rainbow")
