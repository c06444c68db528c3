"""Discovery persisted in a JSON file.

The file holds one document:

    {
        "keysByTypeName": {"translations": 0},
        "keysByUuid": {"6f1c...": 0},
        "typesByKey": {"0": "<serialized type>"},
        "bindingsByKey": {"0": "<serialized list of bindings>"},
        "nextKey": 1
    }

Each type gets a small integer key; the bindings of a type are stored
together under the type's key. The document is read on first use and
rewritten after every change.

Usage:
    discovery = JsonDiscovery("var/discovery.json", repo)
    discovery.define("translations")
    discovery.bind("/app/trans/*.xlf", "translations")
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bindery.config import DiscoverySettings
from bindery.core.binding import BindingInitializer, binding_from_dict
from bindery.core.schema import BindingType
from bindery.discovery.editable import EditableDiscovery
from bindery.errors import LoadingError, StorageCorruptError

if TYPE_CHECKING:
    from bindery.repository import ResourceRepository

logger = logging.getLogger(__name__)


class DiscoveryDocument(BaseModel):
    """Top-level structure of the JSON file."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    keys_by_type_name: dict[str, int] = Field(default_factory=dict, alias="keysByTypeName")
    keys_by_uuid: dict[str, int] = Field(default_factory=dict, alias="keysByUuid")
    types_by_key: dict[int, str] = Field(default_factory=dict, alias="typesByKey")
    bindings_by_key: dict[int, str] = Field(default_factory=dict, alias="bindingsByKey")
    next_key: int = Field(default=0, ge=0, alias="nextKey")


class JsonDiscovery(EditableDiscovery):
    """Lazy-binding discovery stored in a JSON file.

    A missing file is an empty discovery; it is created on the first change.

    Args:
        path: Location of the JSON file.
        repository: Repository the binding queries are resolved against.
        initializers: Extra binding initializers.
        indent: Indentation of the written document, None for compact output.
    """

    def __init__(
        self,
        path: str | Path,
        repository: ResourceRepository,
        initializers: Iterable[BindingInitializer] = (),
        indent: int | None = 4,
    ):
        self._path = Path(path)
        self._indent = indent
        self._type_keys: dict[str, int] = {}
        self._next_key = 0
        super().__init__(repository, initializers)

    @classmethod
    def from_settings(
        cls,
        repository: ResourceRepository,
        settings: DiscoverySettings | None = None,
        initializers: Iterable[BindingInitializer] = (),
    ) -> JsonDiscovery:
        """Create a discovery from configuration.

        Raises:
            ValueError: If no JSON path is configured.
        """
        settings = settings or DiscoverySettings()
        if settings.json_path is None:
            raise ValueError("No JSON path configured. Set BINDERY_JSON_PATH.")
        return cls(settings.json_path, repository, initializers, indent=settings.json_indent)

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> DiscoveryDocument:
        if not self._path.exists():
            return DiscoveryDocument()
        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            logger.warning("Discovery file %s is empty, starting with an empty discovery", self._path)
            return DiscoveryDocument()
        try:
            return DiscoveryDocument.model_validate_json(text)
        except ValidationError as e:
            raise LoadingError(f"The discovery file {self._path} is invalid: {e}") from e

    def _load(self) -> None:
        document = self._read_document()
        self._type_keys = dict(document.keys_by_type_name)
        self._next_key = document.next_key

        try:
            for type_name, key in sorted(self._type_keys.items(), key=lambda item: item[1]):
                if key not in document.types_by_key:
                    raise StorageCorruptError.rebuild()
                binding_type = BindingType.from_dict(json.loads(document.types_by_key[key]))
                if binding_type.name != type_name:
                    raise StorageCorruptError.rebuild()
                self._index.define(binding_type)

            key_names = {key: name for name, key in self._type_keys.items()}
            for key, blob in sorted(document.bindings_by_key.items()):
                if key not in key_names:
                    raise StorageCorruptError.rebuild()
                for data in json.loads(blob):
                    binding = binding_from_dict(data, self._index.get_type)
                    if binding.type_name != key_names[key]:
                        raise StorageCorruptError.rebuild()
                    self._index.insert(binding, initialized=False)
        except json.JSONDecodeError as e:
            raise LoadingError(f"The discovery file {self._path} holds malformed data: {e}") from e

        for uuid, key in document.keys_by_uuid.items():
            binding_id = self._find_uuid(uuid)
            if binding_id is None or self._type_keys.get(self._index.peek(binding_id).type_name) != key:
                raise StorageCorruptError.rebuild()
        logger.debug("Loaded %d bindings from %s", len(self._index), self._path)

    def _find_uuid(self, uuid: str) -> int | None:
        try:
            return self._index.id_for_uuid(UUID(uuid))
        except ValueError:
            return None

    def _flush(self) -> None:
        types = self._index.get_types()
        defined = {binding_type.name for binding_type in types}
        for type_name in list(self._type_keys):
            if type_name not in defined:
                del self._type_keys[type_name]
        for binding_type in types:
            if binding_type.name not in self._type_keys:
                self._type_keys[binding_type.name] = self._next_key
                self._next_key += 1

        keys_by_uuid: dict[str, int] = {}
        types_by_key: dict[int, str] = {}
        bindings_by_key: dict[int, str] = {}
        for binding_type in types:
            key = self._type_keys[binding_type.name]
            types_by_key[key] = json.dumps(binding_type.to_dict())
            bindings = [self._index.peek(i) for i in self._index.ids_for_type(binding_type.name)]
            if bindings:
                bindings_by_key[key] = json.dumps([binding.to_dict() for binding in bindings])
            for binding in bindings:
                keys_by_uuid[str(binding.uuid)] = key

        document = DiscoveryDocument(
            keys_by_type_name=dict(self._type_keys),
            keys_by_uuid=keys_by_uuid,
            types_by_key=types_by_key,
            bindings_by_key=bindings_by_key,
            next_key=self._next_key,
        )
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            document.model_dump_json(by_alias=True, indent=self._indent) + "\n", encoding="utf-8"
        )
        logger.debug("Flushed discovery to %s", self._path)
