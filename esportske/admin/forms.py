"""Forms for the admin blueprint."""

from wtforms import StringField
from wtforms.validators import AnyOf, DataRequired

from esportske.core.constants import ROLES
from esportske.core.forms import ApiForm


class RoleForm(ApiForm):
    """Body of a role change."""

    role = StringField(
        "Role",
        validators=[
            DataRequired(message="Role is required"),
            AnyOf(ROLES, message="Role must be one of: user, admin"),
        ],
    )
