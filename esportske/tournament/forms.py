"""Forms for the tournament blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional, Regexp

from esportske.core.forms import ApiForm

# Ids become part of store keys, so they may not contain separators.
TOURNAMENT_ID_PATTERN = r"^[^:/]+$"


class RegistrationForm(ApiForm):
    """Body of a tournament registration request."""

    tournamentId = StringField(
        "Tournament ID",
        validators=[
            DataRequired(message="Tournament ID and title are required"),
            Regexp(TOURNAMENT_ID_PATTERN, message="Invalid tournament ID"),
        ],
    )
    tournamentTitle = StringField(
        "Tournament Title",
        validators=[DataRequired(message="Tournament ID and title are required")],
    )
    gamertag = StringField("Gamertag", validators=[Optional(), Length(max=50)])


class UnregistrationForm(ApiForm):
    """Body of a tournament unregistration request."""

    tournamentId = StringField(
        "Tournament ID",
        validators=[
            DataRequired(message="Tournament ID is required"),
            Regexp(TOURNAMENT_ID_PATTERN, message="Invalid tournament ID"),
        ],
    )
