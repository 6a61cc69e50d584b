"""Routes for the auth blueprint."""

from flask import current_app, jsonify

from . import bp
from .forms import SignupForm
from .services import AuthService


@bp.route("/signup", methods=["POST"])
def signup():
    """Create an account and its profile.

    The email is confirmed up front; the client signs in separately.
    """
    form = SignupForm()
    form.validate_or_raise()

    profile = AuthService.signup(
        {
            "email": form.email.data.strip(),
            "password": form.password.data,
            "name": form.name.data.strip(),
            "location": form.location.data,
            "favoriteGame": form.favoriteGame.data,
            "birthday": form.birthday.data,
        }
    )
    current_app.logger.info(f"New signup: {profile['id']}")
    return (
        jsonify(
            {
                "success": True,
                "user": {
                    "id": profile["id"],
                    "email": profile["email"],
                    "name": profile["name"],
                },
            }
        ),
        201,
    )
