"""Binding entities.

A binding associates something (a resource query, a class name) with a
binding type and carries one value for every parameter the type declares.

Bindings compare by value: two bindings are equal when they bind the same
target to the same type name with the same parameter values. Their uuid,
their type instance and how their resources are obtained do not matter.

Usage:
    binding = ResourceBinding.lazy("/app/trans/*.xlf", translations, {"domain": "errors"}, repo)
    binding.get_parameter_value("locale")  # type default
    binding.get_resources()                # resolved now, cached afterwards
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar
from uuid import UUID, uuid4

from bindery.core.binding.resolution import EagerResources, LazyResources, ResourceResolution
from bindery.core.query import DEFAULT_LANGUAGE, check_language
from bindery.core.schema import BindingType, resolve_parameters
from bindery.errors import BindingError, NoSuchParameterError, NotInitializedError

if TYPE_CHECKING:
    from bindery.repository import Resource, ResourceRepository


def _values_equal(left: Mapping[str, Any], right: Mapping[str, Any]) -> bool:
    if left.keys() != right.keys():
        return False
    # "2" and 2 (or True and 1) are different parameter values
    return all(type(left[k]) is type(right[k]) and left[k] == right[k] for k in left)


class Binding:
    """Base class of all bindings.

    Parameter values are validated against the type once, here, and the
    defaults of unset optional parameters are filled in.

    Args:
        binding_type: Type of the binding.
        parameters: Parameter values supplied by the caller.
        uuid: Identifier, generated if omitted.

    Raises:
        NoSuchParameterError: If a supplied parameter is not declared.
        MissingParameterError: If a required parameter is not supplied.
    """

    KIND: ClassVar[str] = "abstract"

    __slots__ = ("_type", "_parameters", "_uuid")

    def __init__(
        self,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None = None,
        uuid: UUID | None = None,
    ):
        if not isinstance(binding_type, BindingType):
            raise TypeError(f"Expected a BindingType. Got: {type(binding_type).__name__}")
        self._type = binding_type
        self._parameters = resolve_parameters(binding_type, parameters)
        self._uuid = uuid or uuid4()

    @property
    def uuid(self) -> UUID:
        return self._uuid

    @property
    def type(self) -> BindingType:
        return self._type

    @property
    def type_name(self) -> str:
        return self._type.name

    @property
    def parameters(self) -> dict[str, Any]:
        """All parameter values, sorted by name (a copy)."""
        return dict(self._parameters)

    def get_parameter_value(self, name: str) -> Any:
        """Value of a parameter, the type default if it was not supplied.

        Raises:
            NoSuchParameterError: If the type does not declare the parameter.
        """
        if name not in self._parameters:
            raise NoSuchParameterError.for_parameter_name(name, self.type_name)
        return self._parameters[name]

    def has_parameter_value(self, name: str) -> bool:
        return name in self._parameters

    def has_parameter_values(self) -> bool:
        return bool(self._parameters)

    def matches_parameters(self, parameters: Mapping[str, Any]) -> bool:
        """Whether the stored values, defaults included, equal `parameters` exactly."""
        return _values_equal(self._parameters, dict(parameters))

    def _target(self) -> tuple[str, ...]:
        """What is bound. Part of the equality key."""
        return ()

    def equals(self, other: object) -> bool:
        """Value equality: same target, same type name, same parameters."""
        if not isinstance(other, Binding):
            return False
        return (
            self.KIND == other.KIND
            and self._target() == other._target()
            and self.type_name == other.type_name
            and _values_equal(self._parameters, other._parameters)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Binding):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.KIND,
            "uuid": str(self._uuid),
            "type": self.type_name,
            "parameters": dict(self._parameters),
        }

    def __repr__(self) -> str:
        target = ", ".join(repr(part) for part in self._target())
        return f"{type(self).__name__}({target}, type={self.type_name!r}, parameters={self._parameters!r})"


class ResourceBinding(Binding):
    """Binds the resources matched by a path or glob query.

    A binding built without a resolution is uninitialized: a binding
    initializer has to attach a repository before its resources can be read.
    Use `eager()` or `lazy()` to build initialized bindings.

    Args:
        query: Path or glob selecting the resources.
        binding_type: Type of the binding.
        parameters: Parameter values supplied by the caller.
        language: Query language, only "glob" is supported.
        resolution: How the resources are obtained.
        uuid: Identifier, generated if omitted.

    Raises:
        UnsupportedLanguageError: For languages other than glob.
        BindingError: If an eager resolution holds no resources.
    """

    KIND: ClassVar[str] = "resource"

    __slots__ = ("_query", "_language", "_resolution")

    def __init__(
        self,
        query: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None = None,
        language: str = DEFAULT_LANGUAGE,
        resolution: ResourceResolution | None = None,
        uuid: UUID | None = None,
    ):
        if not isinstance(query, str) or not query:
            raise ValueError("The query must be a non-empty string.")
        super().__init__(binding_type, parameters, uuid)
        self._query = query
        self._language = check_language(language).value
        self._resolution: ResourceResolution | None = None
        if resolution is not None:
            self._attach(resolution)

    @classmethod
    def eager(
        cls,
        query: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None,
        repository: ResourceRepository,
        language: str = DEFAULT_LANGUAGE,
    ) -> ResourceBinding:
        """Build a binding whose resources are resolved now.

        Raises:
            BindingError: If the query currently matches no resource.
        """
        binding = cls(query, binding_type, parameters, language)
        binding._attach(EagerResources.resolve(repository, query, binding.language))
        return binding

    @classmethod
    def lazy(
        cls,
        query: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None,
        repository: ResourceRepository,
        language: str = DEFAULT_LANGUAGE,
    ) -> ResourceBinding:
        """Build a binding whose resources are resolved on first access."""
        binding = cls(query, binding_type, parameters, language)
        binding._attach(LazyResources(repository, query, binding.language))
        return binding

    def _attach(self, resolution: ResourceResolution) -> None:
        if isinstance(resolution, EagerResources) and not resolution.get():
            raise BindingError.no_resources(self._query)
        self._resolution = resolution

    @property
    def query(self) -> str:
        return self._query

    @property
    def language(self) -> str:
        return self._language

    @property
    def resolution(self) -> ResourceResolution | None:
        return self._resolution

    @property
    def is_initialized(self) -> bool:
        return self._resolution is not None

    def initialize(self, repository: ResourceRepository) -> None:
        """Attach a repository to an uninitialized binding.

        Raises:
            RuntimeError: If the binding is already initialized.
        """
        if self._resolution is not None:
            raise RuntimeError(f'The binding "{self.uuid}" is already initialized.')
        self._resolution = LazyResources(repository, self._query, self._language)

    def get_resources(self) -> list[Resource]:
        """Resources selected by the query.

        Raises:
            NotInitializedError: If no repository was attached.
        """
        if self._resolution is None:
            raise NotInitializedError.for_binding(self)
        return self._resolution.get()

    def _target(self) -> tuple[str, ...]:
        return (self._query,)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["query"] = self._query
        data["language"] = self._language
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], binding_type: BindingType) -> ResourceBinding:
        """Rebuild an uninitialized binding from `to_dict()` output."""
        return cls(
            data["query"],
            binding_type,
            data.get("parameters"),
            language=data.get("language", DEFAULT_LANGUAGE),
            uuid=UUID(data["uuid"]) if data.get("uuid") else None,
        )


class ClassBinding(Binding):
    """Binds a class, identified by its fully-qualified name.

    Args:
        class_name: Fully-qualified class name, e.g. "myapp.plugins.Plugin".
        binding_type: Type of the binding.
        parameters: Parameter values supplied by the caller.
        uuid: Identifier, generated if omitted.
    """

    KIND: ClassVar[str] = "class"

    __slots__ = ("_class_name",)

    def __init__(
        self,
        class_name: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None = None,
        uuid: UUID | None = None,
    ):
        if not isinstance(class_name, str) or not class_name:
            raise ValueError("The class name must be a non-empty string.")
        super().__init__(binding_type, parameters, uuid)
        self._class_name = class_name

    @property
    def class_name(self) -> str:
        return self._class_name

    def _target(self) -> tuple[str, ...]:
        return (self._class_name,)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["class_name"] = self._class_name
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], binding_type: BindingType) -> ClassBinding:
        return cls(
            data["class_name"],
            binding_type,
            data.get("parameters"),
            uuid=UUID(data["uuid"]) if data.get("uuid") else None,
        )
