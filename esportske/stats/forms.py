"""Forms for player stat maintenance."""

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, Optional

from esportske.core.forms import ApiForm


class PlayerStatsForm(ApiForm):
    """Body of an admin stats update."""

    userId = StringField("User ID", validators=[DataRequired(message="User ID and game are required")])
    game = StringField("Game", validators=[DataRequired(message="User ID and game are required")])
    wins = IntegerField("Wins", default=0, validators=[Optional()])
    points = IntegerField("Points", default=0, validators=[Optional()])


class RecalculateRanksForm(ApiForm):
    """Body of a rank recalculation request; every game when empty."""

    game = StringField("Game", validators=[Optional()])
