"""Service layer for blog posts."""

from __future__ import annotations

import datetime
import logging
from typing import Any

from esportske.core.constants import BLOG_POST_PREFIX
from esportske.core.keys import blog_post_key
from esportske.core.kv_store import KVStore
from esportske.core.types import BlogPost
from esportske.core.utils import generate_id, utcnow_iso
from esportske.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "content")


class BlogService:
    """Handles data access for blog posts."""

    @staticmethod
    def list_posts(
        category: str | None = None, store: KVStore | None = None
    ) -> list[BlogPost]:
        """Fetch all posts, newest first, optionally in one category."""
        store = store or KVStore()
        posts = [p for p in store.get_by_prefix(BLOG_POST_PREFIX) if p]
        if category:
            posts = [p for p in posts if p.get("category") == category]
        posts.sort(key=lambda p: (p.get("date") or "", p.get("createdAt") or ""), reverse=True)
        return posts

    @staticmethod
    def get_post(post_id: str, store: KVStore | None = None) -> BlogPost:
        store = store or KVStore()
        post = store.get(blog_post_key(post_id))
        if not post:
            raise NotFoundError("Blog post not found")
        return post

    @staticmethod
    def create_post(data: dict[str, Any], store: KVStore | None = None) -> BlogPost:
        """Create a post with a server-generated id."""
        store = store or KVStore()
        for field in REQUIRED_FIELDS:
            if not str(data.get(field) or "").strip():
                raise ValidationError("Title and content are required")

        now = utcnow_iso()
        post: BlogPost = {
            "excerpt": "",
            "author": "",
            "category": "",
            "readTime": "",
            "date": datetime.date.today().isoformat(),
            **data,
            "id": generate_id(),
            "createdAt": now,
            "updatedAt": now,
        }
        store.set(blog_post_key(post["id"]), post)
        logger.info(f"Created blog post {post['id']}")
        return post

    @staticmethod
    def update_post(
        post_id: str, data: dict[str, Any], store: KVStore | None = None
    ) -> BlogPost:
        """Merge ``data`` over a post, keeping its id and creation time."""
        store = store or KVStore()
        existing = BlogService.get_post(post_id, store)
        for field in REQUIRED_FIELDS:
            if field in data and not str(data[field] or "").strip():
                raise ValidationError("Title and content may not be empty")

        post: BlogPost = {
            **existing,
            **data,
            "id": existing.get("id", post_id),
            "createdAt": existing.get("createdAt", ""),
            "updatedAt": utcnow_iso(),
        }
        store.set(blog_post_key(post_id), post)
        return post

    @staticmethod
    def delete_post(post_id: str, store: KVStore | None = None) -> None:
        store = store or KVStore()
        BlogService.get_post(post_id, store)
        store.delete(blog_post_key(post_id))
