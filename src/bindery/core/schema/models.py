"""Binding type schemas.

A binding type is a named schema that declares which parameters the bindings
of that type may or must carry.

Usage:
    translations = BindingType(
        "translations",
        parameters=[
            BindingParameter("domain", required=True),
            BindingParameter("locale", default="en"),
        ],
    )
    translations.get_parameter_values()  # {"locale": "en"}
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from bindery.errors import LoadingError, NoSuchParameterError


def _check_name(name: Any, what: str) -> None:
    if not isinstance(name, str):
        raise TypeError(f"The {what} name must be a string. Got: {type(name).__name__}")
    if not name:
        raise ValueError(f"The {what} name must not be empty.")
    if not name[0].isalpha():
        raise ValueError(f'The {what} name must start with a letter. Got: "{name}"')


def _class_path(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _import_class(path: str) -> type:
    module_name, _, qualname = path.rpartition(".")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise LoadingError(f'Could not import the binding class "{path}".') from e
    for attr in qualname.split("."):
        obj = getattr(obj, attr, None)
        if obj is None:
            raise LoadingError(f'Could not import the binding class "{path}".')
    if not isinstance(obj, type):
        raise LoadingError(f'"{path}" is not a class.')
    return obj


@dataclass(frozen=True, slots=True)
class BindingParameter:
    """A parameter declared by a binding type.

    Required parameters must be supplied by every binding and therefore
    cannot carry a default.

    Args:
        name: Parameter name, must start with a letter.
        required: Whether every binding must supply a value.
        default: Value used when an optional parameter is not supplied.
    """

    name: str
    required: bool = False
    default: Any = None

    def __post_init__(self) -> None:
        _check_name(self.name, "parameter")
        if self.required and self.default is not None:
            raise ValueError("Required parameters must not have default values.")

    @property
    def optional(self) -> bool:
        return not self.required

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "required": self.required, "default": self.default}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BindingParameter:
        return cls(
            name=data["name"],
            required=data.get("required", False),
            default=data.get("default"),
        )


@dataclass(frozen=True, slots=True)
class BindingType:
    """Named parameter schema for bindings.

    Parameters are kept sorted by name so that two types declaring the same
    parameters compare equal and serialize identically. Types are immutable;
    many bindings share one instance.

    Args:
        name: Type name, unique within a discovery, must start with a letter.
        parameters: Declared parameters, in any order.
        binding_class: If set, only bindings that are instances of this
            class may be added for the type.
    """

    name: str
    parameters: tuple[BindingParameter, ...] = ()
    binding_class: type | None = None
    _by_name: dict[str, BindingParameter] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __init__(
        self,
        name: str,
        parameters: Iterable[BindingParameter] = (),
        binding_class: type | None = None,
    ):
        _check_name(name, "type")
        by_name: dict[str, BindingParameter] = {}
        for parameter in parameters:
            if not isinstance(parameter, BindingParameter):
                raise TypeError(
                    f"Expected BindingParameter instances. Got: {type(parameter).__name__}"
                )
            by_name[parameter.name] = parameter
        by_name = dict(sorted(by_name.items()))
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "parameters", tuple(by_name.values()))
        object.__setattr__(self, "binding_class", binding_class)
        object.__setattr__(self, "_by_name", by_name)

    def has_parameter(self, name: str) -> bool:
        return name in self._by_name

    def get_parameter(self, name: str) -> BindingParameter:
        """Get a declared parameter.

        Raises:
            NoSuchParameterError: If the type does not declare it.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise NoSuchParameterError.for_parameter_name(name, self.name) from None

    def get_parameter_names(self) -> list[str]:
        return list(self._by_name)

    def get_parameter_value(self, name: str) -> Any:
        """Default value of a parameter (None for required ones).

        Raises:
            NoSuchParameterError: If the type does not declare it.
        """
        return self.get_parameter(name).default

    def get_parameter_values(self, include_required: bool = False) -> dict[str, Any]:
        """Default values keyed by parameter name.

        Args:
            include_required: Also list required parameters (with None).

        Returns:
            Defaults of the optional parameters, sorted by name.
        """
        return {
            name: parameter.default
            for name, parameter in self._by_name.items()
            if include_required or not parameter.required
        }

    def has_required_parameters(self) -> bool:
        return any(parameter.required for parameter in self.parameters)

    def has_optional_parameters(self) -> bool:
        return any(not parameter.required for parameter in self.parameters)

    def accepts_binding(self, binding: object | type) -> bool:
        """Check whether bindings of a class may be added for this type."""
        if self.binding_class is None:
            return True
        cls = binding if isinstance(binding, type) else type(binding)
        return issubclass(cls, self.binding_class)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [parameter.to_dict() for parameter in self.parameters],
            "binding_class": _class_path(self.binding_class) if self.binding_class else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BindingType:
        """Rebuild a type from `to_dict()` output.

        Raises:
            LoadingError: If the restricted binding class cannot be imported.
        """
        binding_class = data.get("binding_class")
        return cls(
            name=data["name"],
            parameters=[BindingParameter.from_dict(p) for p in data.get("parameters", [])],
            binding_class=_import_class(binding_class) if binding_class else None,
        )
