"""
Observers wiring editorial rules into the blog models.
"""

from __future__ import annotations

import re
from typing import List

from modelhooks import Observer

from .models import Post


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


class PostObserver(Observer):
    def __init__(self) -> None:
        self.audit: List[str] = []

    def creating(self, post: Post) -> None:
        post.slug = slugify(post.title)
        self.audit.append(f"creating {post.slug}")

    def publishing(self, post: Post):
        if not getattr(post, "body", ""):
            self.audit.append(f"refused {post.slug}")
            return False
        return None

    def published(self, post: Post) -> None:
        self.audit.append(f"published {post.slug}")

    def deleting(self, post: Post):
        # Published posts must be unpublished before removal.
        if getattr(post, "published", False):
            self.audit.append(f"kept {post.slug}")
            return False
        return None

    def restored(self, post: Post) -> None:
        self.audit.append(f"restored {post.slug}")
