"""Field types and helpers shared by the request schemas."""

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

from fastapi import Path
from pydantic import AfterValidator, AnyHttpUrl, BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from cardapio.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Validated as an http(s) URL, stored as plain text
UrlStr = Annotated[AnyHttpUrl, AfterValidator(str)]

# Ids and display orders land in PostgreSQL INTEGER columns
INT4_MIN = -2_147_483_648
INT4_MAX = 2_147_483_647
PositiveId = Annotated[int, Field(gt=0, le=INT4_MAX)]
DisplayOrder = Annotated[int, Field(ge=INT4_MIN, le=INT4_MAX)]
PathId = Annotated[int, Path(gt=0, le=INT4_MAX)]


def pydantic_violations(exc: PydanticValidationError) -> list[tuple[str, str]]:
    """(field path, message) pairs from a pydantic ValidationError."""
    violations = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        violations.append((path or "body", error.get("msg", "invalid value")))
    return violations


def parse_model(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """Validate raw input into `model`, raising the service ValidationError on failure."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        details = pydantic_violations(exc)
        message = "; ".join(f"{field}: {msg}" for field, msg in details)
        raise ValidationError(f"Invalid data: {message}", details=details) from exc


def provided_changes(update: BaseModel) -> dict:
    """Fields explicitly sent in a partial update. Empty updates are rejected."""
    changes = update.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("No valid fields provided for update")
    return changes
