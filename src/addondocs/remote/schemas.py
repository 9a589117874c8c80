"""Contracts for the GitHub REST responses the remote client relies on."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel


class SearchItem(BaseModel):
    name: str
    path: str
    sha: str
    url: str
    html_url: str
    score: Optional[float] = None


class SearchResponse(BaseModel):
    total_count: int
    incomplete_results: bool
    items: List[SearchItem]


class ContentFile(BaseModel):
    type: Literal["file"]
    encoding: Literal["base64"]
    size: int
    name: str
    path: str
    content: str
    sha: str
    url: str
    git_url: Optional[str] = None
    html_url: Optional[str] = None
    download_url: Optional[str] = None
