"""Forms for the auth blueprint."""

from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, Length, Optional

from esportske.core.forms import ApiForm


class SignupForm(ApiForm):
    """Signup request body."""

    email = StringField(
        "Email",
        validators=[DataRequired(message="Email, password, and name are required")],
    )
    password = PasswordField(
        "Password",
        validators=[DataRequired(message="Email, password, and name are required")],
    )
    name = StringField(
        "Name",
        validators=[
            DataRequired(message="Email, password, and name are required"),
            Length(max=100),
        ],
    )
    location = StringField("Location", validators=[Optional()])
    favoriteGame = StringField("Favorite Game", validators=[Optional()])
    birthday = StringField("Birthday", validators=[Optional()])
