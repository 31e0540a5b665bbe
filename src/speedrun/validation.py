"""Field types shared by the request schemas."""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import Annotated, Any, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from speedrun.config import get_settings

ModelT = TypeVar("ModelT", bound=BaseModel)

_http_url = TypeAdapter(HttpUrl)

RECORD_TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5]?[0-9]):([0-5]?[0-9])$")
LONG_DATE_FORMAT = "%B %d, %Y"  # "March 5, 2004"


def _check_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError as e:
        msg = "Must be a valid URL"
        raise ValueError(msg) from e
    return value


def _parse_record_time(value: Any) -> Any:  # noqa: ANN401
    """Accept ``H:M:S`` strings with one or two digits per part."""
    if isinstance(value, str):
        match = RECORD_TIME_PATTERN.match(value.strip())
        if match is None:
            msg = "Record time must be of format HH:MM:SS"
            raise ValueError(msg)
        hours, minutes, seconds = (int(part) for part in match.groups())
        return time(hours, minutes, seconds)
    return value


def _check_password(value: str) -> str:
    settings = get_settings()
    if len(value) < settings.password_min_length:
        msg = f"Password must be at least {settings.password_min_length} characters"
        raise ValueError(msg)
    if len(value) > settings.password_max_length:
        msg = f"Password must be at most {settings.password_max_length} characters"
        raise ValueError(msg)
    return value


def _parse_release_date(value: Any) -> Any:  # noqa: ANN401
    """Accept ISO dates as well as ``Month D, YYYY``."""
    if isinstance(value, str) and value and not value[0].isdigit():
        try:
            return datetime.strptime(value.strip(), LONG_DATE_FORMAT).date()
        except ValueError as e:
            msg = "Release date must be YYYY-MM-DD or 'Month D, YYYY'"
            raise ValueError(msg) from e
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]
RecordTime = Annotated[time, BeforeValidator(_parse_record_time)]
ReleaseDate = Annotated[date, BeforeValidator(_parse_release_date)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Password = Annotated[str, AfterValidator(_check_password)]


def parse_form(model: type[ModelT], **fields: Any) -> ModelT:  # noqa: ANN401
    """Validate multipart form fields with a pydantic model.

    Blank optional fields are dropped so they fall back to the model default.
    Validation errors surface the same way as JSON body errors.
    """
    values = {key: value for key, value in fields.items() if value not in (None, "")}
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e
