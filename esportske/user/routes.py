"""Routes for the user blueprint."""

from flask import g, jsonify

from esportske.auth.decorators import login_required
from esportske.auth.services import AuthService

from . import bp
from .services import UserService


@bp.route("/profile")
@login_required
def profile():
    """Return the caller's profile, syncing the admin role from the account."""
    user_profile = UserService.get_profile(g.account["id"])
    user_profile = AuthService.sync_role_if_stale(g.account, user_profile)
    return jsonify({"profile": user_profile})


@bp.route("/my-tournaments")
@login_required
def my_tournaments():
    """List the tournaments the caller is registered for."""
    user_profile = UserService.get_profile(g.account["id"])
    return jsonify({"tournaments": user_profile.get("registeredTournaments") or []})
