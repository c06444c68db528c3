"""Binding serialization helpers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from bindery.core.binding.models import Binding, ClassBinding, ResourceBinding
from bindery.core.schema import BindingType
from bindery.errors import LoadingError, NoSuchTypeError

_KINDS: dict[str, type[Binding]] = {
    ResourceBinding.KIND: ResourceBinding,
    ClassBinding.KIND: ClassBinding,
}


def binding_from_dict(
    data: Mapping[str, Any],
    get_type: Callable[[str], BindingType],
) -> Binding:
    """Rebuild a binding from `Binding.to_dict()` output.

    Resource bindings come back uninitialized; run the discovery's
    initializers before reading their resources.

    Args:
        data: Serialized binding.
        get_type: Looks up the binding type by name.

    Returns:
        The restored binding, carrying its original uuid.

    Raises:
        LoadingError: If the data is malformed or names an unknown kind.
        NoSuchTypeError: If the binding type is not defined.
    """
    kind = data.get("kind")
    binding_class = _KINDS.get(kind) if isinstance(kind, str) else None
    if binding_class is None:
        raise LoadingError(f'Unknown binding kind "{kind}".')
    binding_type = get_type(data["type"])
    try:
        return binding_class.from_dict(data, binding_type)  # type: ignore[attr-defined, no-any-return]
    except KeyError as e:
        raise LoadingError(f"The serialized binding lacks the key {e}.") from e


def types_by_name(types: Mapping[str, BindingType]) -> Callable[[str], BindingType]:
    """Type lookup for `binding_from_dict()` backed by a mapping."""

    def get_type(name: str) -> BindingType:
        try:
            return types[name]
        except KeyError:
            raise NoSuchTypeError.for_type_name(name) from None

    return get_type
