"""Shared Pydantic models for thumbcache."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from thumbcache.config.defaults import DEFAULT_PICTURE_URL

_IMG_SRC = re.compile(r"<img src='(.*?)'")


# ── Article contract ──


class Article(BaseModel):
    """A feed article as handed over by the feed parser.

    Only ``picture_url`` matters to the cache; the rest is carried for the
    article store and the views.
    """

    guid: str
    title: str = ""
    link: str = ""
    pub_date: str = ""
    author: str = ""
    category: str = ""
    description: str = ""
    fallback_picture_url: str | None = None

    @property
    def picture_url(self) -> str:
        return self.resolve_picture_url(DEFAULT_PICTURE_URL)

    def resolve_picture_url(self, default: str) -> str:
        """First ``<img src='...'>`` in the description.

        Without one, the article's own fallback wins over ``default``.
        """
        match = _IMG_SRC.search(self.description)
        if match:
            return match.group(1)
        return self.fallback_picture_url or default


# ── Batch results ──


class BatchReport(BaseModel):
    """Outcome of one batch job. Failures map URL → short reason."""

    urls: list[str] = Field(default_factory=list)
    succeeded: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)

    @property
    def attempted(self) -> int:
        return len(self.urls)

    @property
    def all_succeeded(self) -> bool:
        return not self.failed
