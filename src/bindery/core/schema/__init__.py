"""Binding type schemas and parameter validation."""

from bindery.core.schema.models import BindingParameter, BindingType
from bindery.core.schema.validation import (
    ConstraintViolation,
    ParameterValidator,
    SimpleParameterValidator,
    ViolationCode,
    resolve_parameters,
)

__all__ = [
    # Models
    "BindingParameter",
    "BindingType",
    # Validation
    "ConstraintViolation",
    "ParameterValidator",
    "SimpleParameterValidator",
    "ViolationCode",
    "resolve_parameters",
]
