"""Shared implementation of the discovery variants.

A discovery owns one `BindingIndex` and translates the public API into index
operations. Subclasses choose how bindings obtain their resources, how
bindings are found for a resource path, what `find()` does for unknown
types, and (for persistent variants) how state is loaded and flushed.

Usage:
    discovery = EditableDiscovery(repo)
    discovery.define(BindingType("translations", [BindingParameter("domain", required=True)]))
    discovery.bind("/app/trans/*.xlf", "translations", {"domain": "errors"})
    for binding in discovery.get_bindings("/app/trans/errors.fr.xlf"):
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any
from uuid import UUID

from bindery.core.binding import (
    Binding,
    BindingInitializer,
    InitializerChain,
    RepositoryInitializer,
    ResourceBinding,
)
from bindery.core.query import DEFAULT_LANGUAGE, check_language
from bindery.core.schema import BindingType
from bindery.discovery.protocol import BindingPredicate
from bindery.errors import NoSuchBindingError
from bindery.index import BindingIndex, LookupStrategy
from bindery.storage.protocol import BindingStore

if TYPE_CHECKING:
    from bindery.repository import ResourceRepository

logger = logging.getLogger(__name__)


def coerce_type(binding_type: BindingType | str) -> BindingType:
    """Accept a type or a bare type name.

    Raises:
        TypeError: For anything else.
    """
    if isinstance(binding_type, str):
        return BindingType(binding_type)
    if not isinstance(binding_type, BindingType):
        raise TypeError(
            f"Expected argument of type str or BindingType. Got: {type(binding_type).__name__}"
        )
    return binding_type


class IndexedDiscovery:
    """Read side of a discovery backed by a binding index.

    Args:
        repository: Repository resource bindings are resolved against.
        initializers: Extra initializers. A `RepositoryInitializer` for
            `repository` always runs first.
    """

    lookup_strategy: LookupStrategy = LookupStrategy.GLOB_SCAN

    def __init__(
        self,
        repository: ResourceRepository,
        initializers: Iterable[BindingInitializer] = (),
    ):
        self._repository = repository
        self._initializers = InitializerChain([RepositoryInitializer(repository), *initializers])
        self._index = BindingIndex(
            self.lookup_strategy,
            store=self._create_store(),
            initializers=self._initializers,
        )
        self._loaded = False

    @property
    def repository(self) -> ResourceRepository:
        return self._repository

    # Hooks

    def _create_store(self) -> BindingStore | None:
        """Binding store for the index. None selects the in-memory store."""
        return None

    def _find_unknown_type(self, type_name: str) -> list[Binding]:
        """Result of `find()` for a type that was never defined."""
        raise NotImplementedError

    def _load(self) -> None:
        """Hydrate the index from persisted state. Called once, on first use."""

    def _ensure_loaded(self) -> None:
        """Load on first use. A failed load leaves nothing behind and is retried."""
        if self._loaded:
            return
        try:
            self._load()
        except Exception:
            self._index.reset()
            raise
        self._loaded = True

    # Types

    def get_type(self, type_name: str) -> BindingType:
        """Get a defined type.

        Raises:
            NoSuchTypeError: If the type is not defined.
        """
        self._ensure_loaded()
        return self._index.get_type(type_name)

    def get_types(self) -> list[BindingType]:
        self._ensure_loaded()
        return self._index.get_types()

    def has_type(self, type_name: str) -> bool:
        self._ensure_loaded()
        return self._index.has_type(type_name)

    def has_types(self) -> bool:
        self._ensure_loaded()
        return bool(self._index.get_types())

    # Bindings

    def get_binding(self, uuid: UUID) -> Binding:
        """Get a binding by uuid.

        Raises:
            NoSuchBindingError: If no binding has the uuid.
        """
        self._ensure_loaded()
        binding_id = self._index.id_for_uuid(uuid)
        if binding_id is None:
            raise NoSuchBindingError.for_uuid(uuid)
        return self._index.get(binding_id)

    def has_binding(self, uuid: UUID) -> bool:
        self._ensure_loaded()
        return self._index.id_for_uuid(uuid) is not None

    def find(self, type_name: str) -> list[Binding]:
        """Bindings of a type, in insertion order."""
        self._ensure_loaded()
        if not self._index.has_type(type_name):
            return self._find_unknown_type(type_name)
        return self._index.get_many(self._index.ids_for_type(type_name))

    def find_bindings(self, type_name: str, expr: BindingPredicate | None = None) -> list[Binding]:
        """Bindings of a type accepted by `expr`."""
        bindings = self.find(type_name)
        if expr is None:
            return bindings
        return [binding for binding in bindings if expr(binding)]

    def get_bindings(
        self, resource_path: str | None = None, type_name: str | None = None
    ) -> list[Binding]:
        """Bindings applying to a resource path and/or of a type.

        Args:
            resource_path: Concrete resource path. None for any path.
            type_name: Exact type name. None for any type.

        Returns:
            Matching bindings in insertion order, each at most once. Unknown
            types yield an empty list.
        """
        self._ensure_loaded()
        if resource_path is None and type_name is None:
            ids = self._index.all_ids()
        elif resource_path is None:
            ids = self._index.ids_for_type(type_name)  # type: ignore[arg-type]
        else:
            ids = self._index.filter_ids(
                self._index.ids_for_resource_path(resource_path), type_name=type_name
            )
        return self._index.get_many(ids)

    def has_bindings(
        self, type_name: str | None = None, expr: BindingPredicate | None = None
    ) -> bool:
        self._ensure_loaded()
        candidates = (
            self._index.ids_for_type(type_name) if type_name is not None else self._index.all_ids()
        )
        if expr is None:
            return bool(candidates)
        return bool(self._index.filter_ids(candidates, predicate=expr))

    def __len__(self) -> int:
        self._ensure_loaded()
        return len(self._index)


class AbstractDiscovery(IndexedDiscovery):
    """Discovery that types and bindings can be registered with.

    Every mutation that changes the index is followed by `_flush()`.
    """

    # Hooks

    def _create_binding(
        self,
        query: str,
        binding_type: BindingType,
        parameters: Mapping[str, Any] | None,
        language: str,
    ) -> ResourceBinding:
        raise NotImplementedError

    def _flush(self) -> None:
        """Persist the index after a mutation."""

    # Types

    def define(self, binding_type: BindingType | str) -> None:
        """Define a binding type.

        Raises:
            DuplicateTypeError: If a type with the name is already defined.
            TypeError: If the argument is neither a BindingType nor a str.
        """
        binding_type = coerce_type(binding_type)
        self._ensure_loaded()
        self._index.define(binding_type)
        try:
            self._flush()
        except Exception:
            self._index.undefine(binding_type.name)
            raise

    def undefine(self, type_name: str) -> None:
        """Remove a type and all of its bindings. Unknown types are ignored."""
        self._ensure_loaded()
        if not self._index.has_type(type_name):
            return
        self._index.undefine(type_name)
        self._flush()

    # Bindings

    def bind(
        self,
        query: str,
        type_name: str,
        parameters: Mapping[str, Any] | None = None,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        """Bind resources to a type.

        Binding an equal binding again does nothing.

        Args:
            query: Path or glob selecting the resources.
            type_name: Name of a defined type.
            parameters: Values for the type's parameters.
            language: Query language, only "glob" is supported.

        Raises:
            UnsupportedLanguageError: For languages other than glob.
            NoSuchTypeError: If the type is not defined.
            NoSuchParameterError: If a parameter is not declared by the type.
            MissingParameterError: If a required parameter is missing.
            BindingError: If an eager variant finds no resources.
            TypeError: If a persistent variant cannot serialize a parameter value.
        """
        language = check_language(language).value
        self._ensure_loaded()
        binding_type = self._index.get_type(type_name)
        binding = self._create_binding(query, binding_type, parameters, language)
        self._insert(binding)

    def add_binding(self, binding: Binding) -> None:
        """Add an already constructed binding.

        Raises:
            NoSuchTypeError: If the binding's type is not defined.
            BindingNotAcceptedError: If the type does not accept the binding class.
        """
        self._ensure_loaded()
        self._index.get_type(binding.type_name)
        self._insert(binding)

    def _insert(self, binding: Binding) -> None:
        """Index a binding and flush, or leave the discovery unchanged on failure."""
        self._initializers.initialize(binding)
        binding_id = self._index.insert(binding)
        if binding_id is None:
            return
        try:
            self._flush()
        except Exception:
            self._index.remove([binding_id])
            raise

    def unbind(
        self,
        query: str,
        type_name: str | None = None,
        parameters: Mapping[str, Any] | None = None,
        language: str | None = None,
    ) -> None:
        """Remove the bindings stored under exactly this query.

        The query is compared as a string: unbinding "/file*" removes the
        bindings of "/file*" and leaves those of "/file1" alone.

        Args:
            query: Stored query of the bindings to remove.
            type_name: Only remove bindings of this type.
            parameters: Only remove bindings whose stored values, defaults
                included, equal exactly these.
            language: Only remove bindings written in this language.

        Raises:
            UnsupportedLanguageError: For languages other than glob.
        """
        if language is not None:
            language = check_language(language).value
        self._ensure_loaded()

        def predicate(binding: Binding) -> bool:
            if language is not None and isinstance(binding, ResourceBinding):
                if binding.language != language:
                    return False
            return parameters is None or binding.matches_parameters(parameters)

        ids = self._index.filter_ids(
            self._index.ids_for_query(query),
            type_name=type_name,
            predicate=predicate if parameters is not None or language is not None else None,
        )
        if self._index.remove(ids):
            logger.debug("Unbound %d bindings of %s", len(ids), query)
            self._flush()

    def remove_binding(self, uuid: UUID) -> None:
        """Remove a binding by uuid. Unknown uuids are ignored."""
        self._ensure_loaded()
        binding_id = self._index.id_for_uuid(uuid)
        if binding_id is not None:
            self._index.remove([binding_id])
            self._flush()

    def remove_bindings(
        self, type_name: str | None = None, expr: BindingPredicate | None = None
    ) -> None:
        """Remove all bindings, optionally only of a type and/or matching `expr`.

        `expr` sees the bindings as stored, before any initializer ran.
        """
        self._ensure_loaded()
        candidates = (
            self._index.ids_for_type(type_name) if type_name is not None else self._index.all_ids()
        )
        ids = self._index.filter_ids(candidates, predicate=expr)
        if self._index.remove(ids):
            self._flush()

    def clear(self) -> None:
        """Remove every binding and every type."""
        self._ensure_loaded()
        self._index.clear()
        self._flush()

    def remove_types(self) -> None:
        self.clear()
