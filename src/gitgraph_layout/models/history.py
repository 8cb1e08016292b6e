"""Serialized history that can be imported into a graph."""

from typing import Dict, List, Optional

from pydantic import BaseModel


class HistoryCommit(BaseModel):
    """A commit of imported history."""

    hash: str
    parents: List[str] = []
    author: str = ""
    subject: str = ""
    body: str = ""


class HistoryData(BaseModel):
    """Commits listed oldest first, with the refs pointing into them."""

    commits: List[HistoryCommit] = []
    branches: Dict[str, str] = {}
    tags: Dict[str, str] = {}
    head: Optional[str] = None
