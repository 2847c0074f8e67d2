import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from filterflow.constants import BUILTIN_FILTERS_MODULE_PREFIX
from filterflow.exceptions import CoreError, DuplicateRegistrationError, ResourceError
from filterflow.utils import import_module_from_path


class Catalog(ABC, dict[str, Any]):
    """A named dict that remembers where each of its entries came from.

    Every store records a metadata dict in ``sources`` (registration time plus
    whatever the caller passes). Filling the catalog from a directory is a
    template method: subclasses decide which files to read and how to turn a
    file into entries.

    A ``unique`` catalog refuses to store a name twice.
    """

    def __init__(self, name: str, unique: bool = False):
        super().__init__()
        self.name = name
        self.unique = unique
        self.sources: dict[str, dict[str, Any]] = {}

    def __setitem__(self, key: str, value: Any) -> None:
        self.register(key, value)

    def __delitem__(self, key: str) -> None:
        super().__delitem__(key)
        self.sources.pop(key, None)

    def register(self, name: str, item: Any, **metadata: Any) -> Any:
        """Store ``item`` under ``name`` along with its metadata and return it.

        Raises:
            DuplicateRegistrationError: If the catalog is unique and ``name`` is taken.
        """
        if self.unique and name in self:
            raise DuplicateRegistrationError(name)
        super().__setitem__(name, item)
        self.sources[name] = {"registered_at": datetime.now(), **metadata}
        return item

    def get_item_info(self, name: str) -> dict[str, Any] | None:
        """Return the entry's name and metadata, or None when it is not in the catalog."""
        if name not in self:
            return None
        return {"name": name, **self.sources.get(name, {})}

    def builtin_names(self) -> list[str]:
        """Sorted names of entries flagged as built-in."""
        return sorted(name for name in self if self.sources.get(name, {}).get("is_builtin"))

    def custom_names(self) -> list[str]:
        """Sorted names of entries that are not built-in."""
        return sorted(name for name in self if not self.sources.get(name, {}).get("is_builtin"))

    def discover_items_in_dir(self, dir_path: str | Path, **kwargs: Any) -> int:
        """Load every eligible file below ``dir_path`` into the catalog.

        Returns:
            How many entries were added.

        Raises:
            ResourceError: If ``dir_path`` is not a directory.
        """
        root = Path(dir_path)
        if not root.is_dir():
            raise ResourceError(
                f"Directory not found: {dir_path}. Couldn't load {self.name}.",
                resource_type=self.name,
                resource_name=str(dir_path),
            )

        return sum(self._process_file(file_path, **kwargs) for file_path in self._iter_files(root))

    @abstractmethod
    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Yield the files under ``root`` that may hold catalog entries."""

    @abstractmethod
    def _process_file(self, file_path: Path, **kwargs: Any) -> int:
        """Add the entries found in ``file_path`` and return how many there were."""


class CallableCatalog(Catalog):
    """Catalog of Python callables, loaded from ``*.py`` files.

    Entries record the module they were defined in. Anything defined under the
    built-in filters package is flagged ``is_builtin``.
    """

    def register(
        self, name: str, item: Any, module_path: str | None = None, module_name: str | None = None, **metadata: Any
    ) -> Any:
        module_name = module_name or getattr(item, "__module__", None)
        return super().register(
            name,
            item,
            module_path=module_path,
            module_name=module_name,
            is_builtin=bool(module_name and module_name.startswith(BUILTIN_FILTERS_MODULE_PREFIX)),
            **metadata,
        )

    def register_from_module(self, module: ModuleType, predicate: Callable[[Any], bool] | None = None) -> int:
        """Register the module's own members that satisfy ``predicate`` (default: callable).

        Names the module merely imported from elsewhere are left out.
        """
        module_name = module.__name__
        module_path = getattr(module, "__file__", None)

        count = 0
        for name, obj in inspect.getmembers(module, predicate or callable):
            if getattr(obj, "__module__", module_name) != module_name:
                continue
            self.register(name, obj, module_path=module_path, module_name=module_name)
            count += 1
        return count

    def discover_items_in_dir(
        self, dir_path: str | Path, predicate: Callable[[Any], bool] | None = None, **kwargs: Any
    ) -> int:
        """Import every public ``*.py`` file below ``dir_path`` and register matching members.

        Raises:
            ResourceError: If ``dir_path`` is not a directory.
            CoreError: If one of the modules cannot be imported.
        """
        return super().discover_items_in_dir(dir_path, predicate=predicate, **kwargs)

    def _iter_files(self, root: Path) -> Iterator[Path]:
        # dunder files such as __init__.py are package plumbing, not filter modules
        yield from sorted(path for path in root.rglob("*.py") if not path.name.startswith("__"))

    def _process_file(self, file_path: Path, **kwargs: Any) -> int:
        try:
            module = import_module_from_path(file_path.stem, file_path)
        except CoreError as e:
            raise CoreError(
                f"Failed to import module '{file_path.stem}' from '{file_path}': {e}", component="ItemDiscovery"
            ) from e
        return self.register_from_module(module, kwargs.get("predicate"))
