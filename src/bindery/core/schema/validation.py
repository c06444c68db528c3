"""Parameter validation against binding type schemas.

Two flavours exist. Advisory validators collect every violation and return
them; binding construction uses `resolve_parameters()`, which raises on the
first violation.

Usage:
    validator = SimpleParameterValidator()
    for violation in validator.validate({"domain": "errors"}, translations):
        print(violation.code, violation.parameter_name)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from bindery.core.schema.models import BindingType
from bindery.errors import MissingParameterError, NoSuchParameterError


class ViolationCode(Enum):
    """Kinds of parameter constraint violations."""

    NO_SUCH_PARAMETER = 1
    MISSING_PARAMETER = 2


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    """A single failed parameter constraint.

    Attributes:
        code: What went wrong.
        invalid_value: The offending value (None for missing parameters).
        type_name: Name of the type validated against.
        parameter_name: Name of the offending parameter.
    """

    code: ViolationCode
    invalid_value: Any
    type_name: str
    parameter_name: str

    def to_error(self) -> NoSuchParameterError | MissingParameterError:
        if self.code is ViolationCode.NO_SUCH_PARAMETER:
            return NoSuchParameterError.for_parameter_name(self.parameter_name, self.type_name)
        return MissingParameterError.for_parameter_name(self.parameter_name, self.type_name)


@runtime_checkable
class ParameterValidator(Protocol):
    """Checks parameter values against a binding type."""

    def validate(
        self, parameter_values: Mapping[str, Any], binding_type: BindingType
    ) -> list[ConstraintViolation]:
        """Return all violations, empty if the values are valid."""
        ...


class SimpleParameterValidator:
    """Validator that reports undeclared and missing parameters.

    Undeclared parameters are reported first (by name), then missing
    required parameters, both by name.
    """

    def validate(
        self, parameter_values: Mapping[str, Any], binding_type: BindingType
    ) -> list[ConstraintViolation]:
        violations: list[ConstraintViolation] = []

        for name in sorted(parameter_values):
            if not binding_type.has_parameter(name):
                violations.append(
                    ConstraintViolation(
                        code=ViolationCode.NO_SUCH_PARAMETER,
                        invalid_value=parameter_values[name],
                        type_name=binding_type.name,
                        parameter_name=name,
                    )
                )

        for parameter in binding_type.parameters:
            # An explicit None does not satisfy a required parameter
            if parameter.required and parameter_values.get(parameter.name) is None:
                violations.append(
                    ConstraintViolation(
                        code=ViolationCode.MISSING_PARAMETER,
                        invalid_value=None,
                        type_name=binding_type.name,
                        parameter_name=parameter.name,
                    )
                )

        return violations


_default_validator = SimpleParameterValidator()


def resolve_parameters(
    binding_type: BindingType, parameter_values: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Validate supplied values and fill in defaults.

    Args:
        binding_type: Schema to validate against.
        parameter_values: Values supplied by the caller.

    Returns:
        Value for every declared parameter, sorted by name.

    Raises:
        NoSuchParameterError: If a supplied name is not declared.
        MissingParameterError: If a required parameter is not supplied.
    """
    parameter_values = dict(parameter_values or {})
    violations = _default_validator.validate(parameter_values, binding_type)
    if violations:
        raise violations[0].to_error()

    resolved = binding_type.get_parameter_values()
    resolved.update(parameter_values)
    return dict(sorted(resolved.items()))
