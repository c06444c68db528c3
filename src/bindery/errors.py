"""Error taxonomy shared by every discovery variant.

All failures are synchronous and non-retryable: they signal programmer or
data errors, never transient conditions.

Usage:
    try:
        discovery.bind("/app/trans/*.xlf", "translations")
    except NoSuchTypeError:
        discovery.define("translations")
"""

from __future__ import annotations

from typing import Any


class DiscoveryError(Exception):
    """Base class for all errors raised by bindery."""

    pass


class NoSuchTypeError(DiscoveryError):
    """Raised when a binding type is looked up that was never defined."""

    @classmethod
    def for_type_name(cls, type_name: str) -> NoSuchTypeError:
        return cls(f'The binding type "{type_name}" has not been defined.')


class DuplicateTypeError(DiscoveryError):
    """Raised when a binding type is defined twice in the same discovery."""

    @classmethod
    def for_type_name(cls, type_name: str) -> DuplicateTypeError:
        return cls(f'The binding type "{type_name}" is already defined.')


class NoSuchParameterError(DiscoveryError):
    """Raised when a parameter is not declared by a binding type."""

    @classmethod
    def for_parameter_name(cls, parameter_name: str, type_name: str) -> NoSuchParameterError:
        return cls(f'The parameter "{parameter_name}" does not exist on type "{type_name}".')


class MissingParameterError(DiscoveryError):
    """Raised when a required parameter of a binding type is not supplied."""

    @classmethod
    def for_parameter_name(cls, parameter_name: str, type_name: str) -> MissingParameterError:
        return cls(f'The parameter "{parameter_name}" is required for type "{type_name}".')


class BindingError(DiscoveryError):
    """Raised when a binding cannot be constructed, e.g. nothing to bind."""

    @classmethod
    def no_resources(cls, query: str) -> BindingError:
        return cls(f'Did not find any resources to bind for query "{query}".')


class UnsupportedLanguageError(DiscoveryError):
    """Raised for query languages other than glob."""

    @classmethod
    def for_language(cls, language: str, supported: tuple[str, ...] = ("glob",)) -> UnsupportedLanguageError:
        names = ", ".join(f'"{name}"' for name in supported)
        return cls(f'The language "{language}" is not supported. Supported languages are: {names}.')


class NoSuchBindingError(DiscoveryError):
    """Raised when a binding is looked up by an identifier that is not stored."""

    @classmethod
    def for_uuid(cls, uuid: Any) -> NoSuchBindingError:
        return cls(f'The binding "{uuid}" does not exist.')


class BindingNotAcceptedError(DiscoveryError):
    """Raised when a binding type restricts which binding classes it accepts."""

    @classmethod
    def for_binding_class(cls, type_name: str, binding_class: type) -> BindingNotAcceptedError:
        return cls(f'The type "{type_name}" does not accept bindings of class "{binding_class.__name__}".')


class LoadingError(DiscoveryError):
    """Raised when persisted discovery state is missing or malformed."""

    pass


class StorageCorruptError(DiscoveryError):
    """Raised when persisted indices reference bindings that are not stored.

    This never happens unless the persisted files were edited by hand.
    """

    @classmethod
    def rebuild(cls) -> StorageCorruptError:
        return cls("The discovery is corrupt. Please rebuild it.")

    @classmethod
    def missing_binding(cls, binding_id: int) -> StorageCorruptError:
        return cls(f"Could not fetch data for binding with ID {binding_id}.")


class NotInitializedError(DiscoveryError):
    """Raised when resources are read from a binding that has no repository yet."""

    @classmethod
    def for_binding(cls, binding: Any) -> NotInitializedError:
        return cls(f'The binding "{binding.uuid}" must be initialized before accessing resources.')
