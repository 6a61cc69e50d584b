"""Public leaderboard routes."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from esportske.errors import ValidationError

from . import bp
from .services import LeaderboardService


@bp.route("/leaderboard")
def leaderboard() -> Any:
    """Rank the players of one game by points."""
    game = (request.args.get("game") or "").strip()
    if not game:
        raise ValidationError("Game is required")
    return jsonify({"game": game, "leaderboard": LeaderboardService.leaderboard(game)})


@bp.route("/top-games")
def top_games() -> Any:
    """Rank games by distinct registered players."""
    return jsonify({"games": LeaderboardService.top_games()})
