"""Building blocks shared by every contract family.

A contract pairs a request schema with a response schema. Schemas are thin
wrappers around a pydantic ``TypeAdapter``: parsing validates the value and
dumps it back with ``exclude_unset=True`` so legacy shapes keep exactly the
fields they arrived with (no defaults are injected) while normalising
validators (colour upper-casing, household id aliasing) still apply.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Literal, Tuple, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    StringConstraints,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError

from arklowdun_ipc.models import ValidationError

Direction = Literal["request", "response"]

# JSON numbers: ints stay ints, floats stay floats, booleans are rejected.
Number = Union[StrictInt, StrictFloat]

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"

def _upper(value: str) -> str:
    return value.upper()


HexColor = Annotated[
    str,
    StringConstraints(pattern=HEX_COLOR_PATTERN),
    AfterValidator(_upper),
]

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


class FlexibleRecord(BaseModel):
    """Any JSON object; unknown fields pass through untouched."""

    model_config = ConfigDict(extra="allow")


class EmptyRequest(BaseModel):
    """A payload that must be an empty object."""

    model_config = ConfigDict(extra="forbid")


class PassthroughModel(BaseModel):
    """Base for typed shapes that tolerate fields added by newer backends."""

    model_config = ConfigDict(extra="allow")


@dataclass(frozen=True)
class ModelViolation:
    """A violation detected by pydantic model validation."""

    field: str
    message: str
    violation_type: str
    input_value: object


def violations_from(exc: PydanticValidationError) -> Tuple[ModelViolation, ...]:
    """Flatten a pydantic error into one violation per offending location."""
    violations = []
    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        violations.append(
            ModelViolation(
                field=field_path,
                message=error["msg"],
                violation_type=error["type"],
                input_value=error.get("input"),
            )
        )
    return tuple(violations)


@dataclass(frozen=True)
class Schema:
    """Validator for one side (request or response) of a command."""

    annotation: Any
    command: str
    direction: Direction
    _adapter: TypeAdapter[Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_adapter", TypeAdapter(self.annotation))

    def parse(self, value: Any) -> Any:
        """Validate *value* and return it, normalised.

        Raises:
            ValidationError: If *value* does not match the schema.
        """
        try:
            validated = self._adapter.validate_python(value)
        except PydanticValidationError as exc:
            raise ValidationError(
                self.command, self.direction, violations_from(exc)
            ) from exc
        return self._adapter.dump_python(validated, exclude_unset=True)

    def accepts(self, value: Any) -> bool:
        try:
            self._adapter.validate_python(value)
        except PydanticValidationError:
            return False
        return True

    def json_schema(self) -> Dict[str, Any]:
        """JSON Schema (validation mode) derived from the same annotation."""
        return self._adapter.json_schema(mode="validation")


@dataclass(frozen=True)
class Contract:
    """Request/response schema pair bound to one command."""

    command: str
    request: Schema
    response: Schema


def contract(command: str, request: Any, response: Any) -> Contract:
    """Build a :class:`Contract` from two type annotations."""
    return Contract(
        command=command,
        request=Schema(request, command, "request"),
        response=Schema(response, command, "response"),
    )
