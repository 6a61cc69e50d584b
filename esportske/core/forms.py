"""Base form for validating JSON request bodies."""

from __future__ import annotations

from typing import Any

from flask import request
from flask_wtf import FlaskForm  # type: ignore
from wtforms import StringField

from esportske.errors import ValidationError


class ApiForm(FlaskForm):
    """A FlaskForm fed from the JSON body of the current request.

    CSRF protection is off: every mutating endpoint is authenticated with a
    bearer token rather than a cookie session.
    """

    class Meta:
        csrf = False

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        if request.is_json:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError("Request body must be a JSON object")
            if any(isinstance(value, dict) for value in data.values()):
                raise ValidationError("Request body fields may not be objects")
        super().__init__(*args, **kwargs)

    def validate_or_raise(self) -> None:
        """Validate the submitted data, raising the first field error."""
        for field in self:
            if (
                isinstance(field, StringField)
                and field.data is not None
                and not isinstance(field.data, str)
            ):
                raise ValidationError(f"{field.label.text} must be a string")
        if self.validate_on_submit():
            return
        for field_errors in self.errors.values():
            if field_errors:
                raise ValidationError(field_errors[0])
        raise ValidationError("Invalid request body.")
