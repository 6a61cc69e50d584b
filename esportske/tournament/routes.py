"""Routes for the tournament blueprint."""

from __future__ import annotations

from typing import Any

from flask import g, jsonify, request

from esportske.auth.decorators import login_required

from . import bp
from .forms import RegistrationForm, UnregistrationForm
from .services import TournamentService


@bp.route("/tournaments")
def list_tournaments() -> Any:
    """List all tournaments and scrims, newest first."""
    tournament_type = request.args.get("type") or None
    return jsonify({"tournaments": TournamentService.list_tournaments(tournament_type)})


@bp.route("/tournament/<string:tournament_id>/participants")
def participants(tournament_id: str) -> Any:
    """List the roster of a tournament."""
    roster = TournamentService.get_participants(tournament_id)
    return jsonify({"participants": roster, "count": len(roster)})


@bp.route("/register-tournament", methods=["POST"])
@login_required
def register_tournament() -> Any:
    """Register the caller for a tournament."""
    form = RegistrationForm()
    form.validate_or_raise()

    registered = TournamentService.register(
        g.account["id"],
        form.tournamentId.data,
        form.tournamentTitle.data,
        gamertag=(form.gamertag.data or "").strip() or None,
    )
    return jsonify(
        {
            "success": True,
            "message": "Successfully registered for tournament",
            "registeredTournaments": registered,
        }
    )


@bp.route("/unregister-tournament", methods=["POST"])
@login_required
def unregister_tournament() -> Any:
    """Withdraw the caller from a tournament."""
    form = UnregistrationForm()
    form.validate_or_raise()

    registered = TournamentService.unregister(g.account["id"], form.tournamentId.data)
    return jsonify(
        {
            "success": True,
            "message": "Successfully unregistered from tournament",
            "registeredTournaments": registered,
        }
    )
