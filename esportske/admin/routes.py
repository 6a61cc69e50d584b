"""Admin routes for the application.

Every view is wrapped in ``login_required(admin_required=True)``, which runs
the admin check before the view touches the request body or the store.
"""

from __future__ import annotations

from typing import Any

from flask import current_app, g, jsonify, request

from esportske.auth.decorators import login_required
from esportske.blog.services import BlogService
from esportske.errors import ValidationError
from esportske.stats.forms import PlayerStatsForm, RecalculateRanksForm
from esportske.stats.services import LeaderboardService
from esportske.tournament.services import TournamentService
from esportske.user.services import UserService

from . import bp
from .forms import RoleForm
from .services import AdminService


def _json_object() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


# Tournaments


@bp.route("/tournaments", methods=["POST"])
@login_required(admin_required=True)
def create_tournament() -> Any:
    """Create a tournament or scrim."""
    tournament = TournamentService.create_tournament(_json_object())
    current_app.logger.info(f"Admin {g.admin.user_id} created tournament {tournament['id']}")
    return jsonify({"success": True, "tournament": tournament}), 201


@bp.route("/tournaments/<string:tournament_id>", methods=["PUT"])
@login_required(admin_required=True)
def update_tournament(tournament_id: str) -> Any:
    """Merge changes into a tournament."""
    tournament = TournamentService.update_tournament(tournament_id, _json_object())
    return jsonify({"success": True, "tournament": tournament})


@bp.route("/tournaments/<string:tournament_id>", methods=["DELETE"])
@login_required(admin_required=True)
def delete_tournament(tournament_id: str) -> Any:
    """Delete a tournament together with its roster."""
    removed = TournamentService.delete_tournament(tournament_id)
    current_app.logger.info(f"Admin {g.admin.user_id} deleted tournament {tournament_id}")
    return jsonify({"success": True, "removedParticipants": removed})


@bp.route(
    "/tournament/<string:tournament_id>/participant/<string:user_id>",
    methods=["DELETE"],
)
@login_required(admin_required=True)
def remove_participant(tournament_id: str, user_id: str) -> Any:
    """Remove a player from a tournament roster."""
    TournamentService.remove_participant(tournament_id, user_id)
    return jsonify({"success": True})


# Users


@bp.route("/users")
@login_required(admin_required=True)
def list_users() -> Any:
    """List every user profile."""
    return jsonify({"users": UserService.list_profiles()})


@bp.route("/users/<string:user_id>/role", methods=["PATCH"])
@login_required(admin_required=True)
def update_role(user_id: str) -> Any:
    """Promote or demote a user."""
    form = RoleForm()
    form.validate_or_raise()
    profile = AdminService.update_role(user_id, form.role.data)
    current_app.logger.info(f"Admin {g.admin.user_id} set {user_id} role to {form.role.data}")
    return jsonify({"success": True, "user": profile})


@bp.route("/users/<string:user_id>", methods=["DELETE"])
@login_required(admin_required=True)
def delete_user(user_id: str) -> Any:
    """Delete a user and their roster entries."""
    removed = AdminService.delete_user(user_id)
    current_app.logger.info(f"Admin {g.admin.user_id} deleted user {user_id}")
    return jsonify({"success": True, "removedParticipants": removed})


# Config


@bp.route("/config", methods=["GET"])
@login_required(admin_required=True)
def get_config() -> Any:
    """Return the location and game option lists."""
    return jsonify({"config": AdminService.get_config()})


@bp.route("/config", methods=["PUT"])
@login_required(admin_required=True)
def update_config() -> Any:
    """Replace the location and game option lists."""
    config = AdminService.update_config(request.get_json(silent=True))
    return jsonify({"success": True, "config": config})


# Blog


@bp.route("/blog-posts", methods=["GET"])
@login_required(admin_required=True)
def list_blog_posts() -> Any:
    return jsonify({"posts": BlogService.list_posts()})


@bp.route("/blog-posts", methods=["POST"])
@login_required(admin_required=True)
def create_blog_post() -> Any:
    post = BlogService.create_post(_json_object())
    return jsonify({"success": True, "post": post}), 201


@bp.route("/blog-posts/<string:post_id>", methods=["GET"])
@login_required(admin_required=True)
def get_blog_post(post_id: str) -> Any:
    return jsonify({"post": BlogService.get_post(post_id)})


@bp.route("/blog-posts/<string:post_id>", methods=["PUT"])
@login_required(admin_required=True)
def update_blog_post(post_id: str) -> Any:
    post = BlogService.update_post(post_id, _json_object())
    return jsonify({"success": True, "post": post})


@bp.route("/blog-posts/<string:post_id>", methods=["DELETE"])
@login_required(admin_required=True)
def delete_blog_post(post_id: str) -> Any:
    BlogService.delete_post(post_id)
    return jsonify({"success": True})


# Leaderboard


@bp.route("/leaderboard/<path:game>")
@login_required(admin_required=True)
def leaderboard(game: str) -> Any:
    """Full roster for a game, including players without points."""
    return jsonify(
        {
            "game": game,
            "leaderboard": LeaderboardService.leaderboard(game, include_zero=True),
        }
    )


@bp.route("/update-player-stats", methods=["POST"])
@login_required(admin_required=True)
def update_player_stats() -> Any:
    """Set a player's wins and points for a game."""
    form = PlayerStatsForm()
    form.validate_or_raise()
    stats = LeaderboardService.update_player_stats(
        form.userId.data, form.game.data, form.wins.data or 0, form.points.data or 0
    )
    return jsonify({"success": True, "gameStats": stats})


@bp.route("/recalculate-ranks", methods=["POST"])
@login_required(admin_required=True)
def recalculate_ranks() -> Any:
    """Store fresh ranks so leaderboard trends reflect recent changes."""
    form = RecalculateRanksForm()
    form.validate_or_raise()
    updated = LeaderboardService.recalculate_ranks((form.game.data or "").strip() or None)
    return jsonify({"success": True, "updated": updated})
