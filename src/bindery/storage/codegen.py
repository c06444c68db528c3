"""Discovery storage as generated Python source.

`store_discovery()` freezes a discovery into a module holding one
`StaticDiscovery` subclass whose class attributes are literal tables. The
resources of every resource binding are resolved while generating, so the
loaded discovery answers resource path lookups with a dict access.

Usage:
    storage = PythonDiscoveryStorage("build/discovery.py", class_name="AppDiscovery")
    storage.store_discovery(discovery)

    # In production
    discovery = storage.load_discovery(repo)
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
from collections.abc import Iterable
from pathlib import Path
from pprint import pformat
from typing import TYPE_CHECKING, Any

from bindery.config import DiscoverySettings
from bindery.core.binding import BindingInitializer, ResourceBinding
from bindery.errors import LoadingError

if TYPE_CHECKING:
    from bindery.discovery import Discovery, StaticDiscovery
    from bindery.repository import ResourceRepository

logger = logging.getLogger(__name__)

_HEADER = '''"""Generated discovery. Do not edit; regenerate with PythonDiscoveryStorage."""

from bindery.discovery.static import StaticDiscovery


class {class_name}(StaticDiscovery):
'''

_TABLES = (
    "TYPES",
    "BINDINGS",
    "QUERY_INDEX",
    "TYPE_INDEX",
    "RESOURCE_PATH_INDEX",
    "UUID_INDEX",
    "NEXT_ID",
)


def _literal(value: Any) -> str:
    return pformat(value, indent=4, width=88, sort_dicts=False).replace("\n", "\n    ")


def build_tables(discovery: Discovery) -> dict[str, Any]:
    """Flatten a discovery into the class attributes of a StaticDiscovery.

    Bindings are renumbered from 1 in the order `get_bindings()` returns them.
    """
    tables: dict[str, Any] = {
        "TYPES": {t.name: t.to_dict() for t in discovery.get_types()},
        "BINDINGS": {},
        "QUERY_INDEX": {},
        "TYPE_INDEX": {},
        "RESOURCE_PATH_INDEX": {},
        "UUID_INDEX": {},
    }
    binding_id = 0
    for binding_id, binding in enumerate(discovery.get_bindings(), start=1):
        tables["BINDINGS"][binding_id] = binding.to_dict()
        tables["TYPE_INDEX"].setdefault(binding.type_name, []).append(binding_id)
        tables["UUID_INDEX"][str(binding.uuid)] = binding_id
        if isinstance(binding, ResourceBinding):
            tables["QUERY_INDEX"].setdefault(binding.query, []).append(binding_id)
            for path in dict.fromkeys(r.path for r in binding.get_resources()):
                tables["RESOURCE_PATH_INDEX"].setdefault(path, []).append(binding_id)
    tables["NEXT_ID"] = binding_id + 1
    return tables


def render_module(tables: dict[str, Any], class_name: str) -> str:
    """Python source of a module defining the discovery class."""
    lines = [_HEADER.format(class_name=class_name)]
    for name in _TABLES:
        lines.append(f"    {name} = {_literal(tables[name])}\n")
    return "\n".join(lines)


class PythonDiscoveryStorage:
    """Stores discoveries as importable Python modules.

    Args:
        path: Module file to write and read.
        class_name: Name of the generated class.

    Raises:
        ValueError: If class_name is not a valid identifier.
    """

    def __init__(self, path: str | Path, class_name: str = "GeneratedDiscovery"):
        if not class_name.isidentifier():
            raise ValueError(f'"{class_name}" is not a valid class name')
        self._path = Path(path)
        self._class_name = class_name

    @classmethod
    def from_settings(cls, settings: DiscoverySettings | None = None) -> PythonDiscoveryStorage:
        """Create a storage from configuration.

        Raises:
            ValueError: If no output path is configured.
        """
        settings = settings or DiscoverySettings()
        if settings.generated_path is None:
            raise ValueError("No generated path configured. Set BINDERY_GENERATED_PATH.")
        return cls(settings.generated_path, settings.generated_class_name)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def class_name(self) -> str:
        return self._class_name

    def store_discovery(self, discovery: Discovery) -> None:
        """Write a discovery as a module.

        Raises:
            NotInitializedError: If a resource binding has no repository.
        """
        source = render_module(build_tables(discovery), self._class_name)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(source, encoding="utf-8")
        logger.debug("Stored discovery as %s in %s", self._class_name, self._path)

    def load_discovery(
        self,
        repository: ResourceRepository,
        initializers: Iterable[BindingInitializer] = (),
    ) -> StaticDiscovery:
        """Import a generated module and instantiate its discovery.

        Raises:
            LoadingError: If the file is missing, does not import, or lacks
                the discovery class.
        """
        from bindery.discovery.static import StaticDiscovery

        if not self._path.is_file():
            raise LoadingError(f'Could not load discovery from "{self._path}": the file does not exist.')

        digest = hashlib.sha1(str(self._path.resolve()).encode(), usedforsecurity=False).hexdigest()
        spec = importlib.util.spec_from_file_location(f"_bindery_generated_{digest[:12]}", self._path)
        if spec is None or spec.loader is None:
            raise LoadingError(f'Could not load discovery from "{self._path}".')
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except (SyntaxError, ImportError, NameError) as e:
            raise LoadingError(f'Could not load discovery from "{self._path}": {e}') from e

        discovery_class = getattr(module, self._class_name, None)
        if not isinstance(discovery_class, type) or not issubclass(discovery_class, StaticDiscovery):
            raise LoadingError(
                f'The file "{self._path}" does not define the discovery class "{self._class_name}".'
            )
        return discovery_class(repository, initializers)
