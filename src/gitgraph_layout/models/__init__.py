"""Data models for Gitgraph Layout."""

from .commit import Commit, CommitStyle
from .history import HistoryCommit, HistoryData
from .rendered import BranchPath, RenderedData, Waypoint
from .template import (
    BranchStyle,
    CommitTemplateStyle,
    Template,
    TemplateName,
    get_template,
    template_extend,
)

__all__ = [
    "BranchPath",
    "BranchStyle",
    "Commit",
    "CommitStyle",
    "CommitTemplateStyle",
    "HistoryCommit",
    "HistoryData",
    "RenderedData",
    "Template",
    "TemplateName",
    "Waypoint",
    "get_template",
    "template_extend",
]
