"""Public blog routes."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from . import bp
from .services import BlogService


@bp.route("/blog-posts")
def list_posts() -> Any:
    """List published posts, newest first."""
    category = request.args.get("category") or None
    return jsonify({"posts": BlogService.list_posts(category)})
