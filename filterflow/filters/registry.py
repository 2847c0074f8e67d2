from collections.abc import Mapping
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING, Any

from filterflow.builtins.filters import ALL_BUILTIN_FILTERS
from filterflow.catalogs import CallableCatalog
from filterflow.constants import SENDER_APPLY_FILTER
from filterflow.exceptions import DuplicateRegistrationError, MissingRegistrationError, UnknownFilterError
from filterflow.logger import logger
from filterflow.nodes import FilterFunction
from filterflow.utils import is_filter_function
from filterflow.value import Value, as_value

if TYPE_CHECKING:
    from filterflow.settings import FilterFlowSettings


class FilterRegistry:
    """Process-wide registry of named filter functions.

    This registry is a singleton that:
    - Registers all built-in filters when it is first created
    - Serializes writers with a lock, so check-then-store operations are atomic
    - Serves lookups without locking; readers never wait on writers
    - Tracks where each filter came from (built-in module or custom file)
    - Supports discovery of custom filters from directories
    """

    _instance = None
    _lock = Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    cls._initialize_registry(instance)
                    cls._instance = instance
        return cls._instance

    @classmethod
    def _initialize_registry(cls, instance) -> None:
        """Create the backing catalog and load the built-in filters into it.

        Args:
            instance: The FilterRegistry instance to initialize.
        """
        instance._write_lock = Lock()  # noqa: SLF001
        instance._catalog = CallableCatalog("filters")  # noqa: SLF001

        for name, func in ALL_BUILTIN_FILTERS.items():
            instance._catalog.register(name, func)  # noqa: SLF001

        logger.debug(f"Filter registry initialized with {len(ALL_BUILTIN_FILTERS)} built-in filters")

    @classmethod
    def initialize_with_settings(cls, settings: "FilterFlowSettings") -> int:
        """Register custom filters from the directories configured in the settings.

        Directories that do not exist are skipped with a warning.

        Args:
            settings: FilterFlowSettings instance containing configuration.

        Returns:
            Number of custom filters registered.
        """
        existing_dirs = []
        for dir_path in settings.local_filters:
            if Path(dir_path).is_dir():
                existing_dirs.append(dir_path)
            else:
                logger.warning(f"Custom filters directory not found, skipping: {dir_path}")

        return cls.register_custom_filters(existing_dirs, allow_override=settings.allow_filter_override)

    @classmethod
    def register_custom_filters(cls, local_filters_dirs: list[str], allow_override: bool = False) -> int:
        """Discover filter functions in the given directories and register them.

        Every public function taking exactly three positional parameters
        (value, parameter, bound variables) defined in a ``*.py`` file is
        registered under its function name. The run is all or nothing: when it
        fails, none of the discovered filters are registered.

        Args:
            local_filters_dirs: List of directory paths to scan for custom filters.
            allow_override: Let discovered filters shadow existing entries, and let
                later directories shadow earlier ones.

        Returns:
            Number of custom filters registered.

        Raises:
            ResourceError: If a directory does not exist.
            CoreError: If a module fails to import.
            DuplicateRegistrationError: If a discovered name is taken, or defined
                twice, and overriding is not allowed.
        """
        instance = cls()
        discovered = CallableCatalog("custom filters", unique=not allow_override)
        for dir_path in local_filters_dirs:
            discovered.discover_items_in_dir(dir_path, predicate=is_filter_function)

        instance._register_all(discovered, allow_override)  # noqa: SLF001

        logger.info(f"Registered {len(discovered)} custom filters from {len(local_filters_dirs)} directories")
        return len(discovered)

    def _register_all(self, discovered: CallableCatalog, allow_override: bool) -> None:
        with self._write_lock:
            if not allow_override:
                for name in discovered:
                    if name in self._catalog:
                        raise DuplicateRegistrationError(name)
            for name, func in discovered.items():
                self._catalog.register(name, func, module_path=discovered.sources[name].get("module_path"))
        logger.debug(f"Registered custom filters: {', '.join(sorted(discovered))}")

    def exists(self, name: str) -> bool:
        return name in self._catalog

    def get(self, name: str) -> FilterFunction | None:
        """Return the filter registered under ``name``, or None."""
        return self._catalog.get(name)

    def register(self, name: str, func: FilterFunction, **metadata: Any) -> None:
        """Register a new filter.

        Raises:
            DuplicateRegistrationError: If ``name`` is already registered. The
                existing entry is left untouched.
        """
        with self._write_lock:
            if name in self._catalog:
                raise DuplicateRegistrationError(name)
            self._catalog.register(name, func, **metadata)
        logger.debug(f"Registered filter '{name}'")

    def replace(self, name: str, func: FilterFunction, **metadata: Any) -> None:
        """Swap the implementation of an already registered filter.

        Use this with caution since it changes existing filter behaviour.

        Raises:
            MissingRegistrationError: If ``name`` is not registered. Nothing changes.
        """
        with self._write_lock:
            if name not in self._catalog:
                raise MissingRegistrationError(name)
            self._catalog.register(name, func, **metadata)
        logger.debug(f"Replaced filter '{name}'")

    def override(self, name: str, func: FilterFunction, **metadata: Any) -> None:
        """Install ``func`` under ``name``, dropping whatever was registered before.

        The previous entry and its metadata are replaced by a single store, so
        readers never observe the name as missing.
        """
        with self._write_lock:
            self._catalog.register(name, func, **metadata)
        logger.debug(f"Overrode filter '{name}'")

    def registered_filters(self) -> dict[str, FilterFunction]:
        """Snapshot of all registered filters, keyed by name."""
        with self._write_lock:
            return dict(self._catalog)

    def get_filter_info(self, name: str) -> dict[str, Any] | None:
        """Metadata about a registered filter (module, builtin flag, registration time)."""
        with self._write_lock:
            return self._catalog.get_item_info(name)

    @property
    def catalog(self) -> CallableCatalog:
        """The backing catalog. Mutate it only through the registry methods."""
        return self._catalog


def filter_exists(name: str) -> bool:
    """Return True if a filter is registered under ``name``."""
    return FilterRegistry().exists(name)


def register_filter(name: str, func: FilterFunction) -> None:
    """Register a new filter.

    You usually want to call this once, at import or start-up time, before any
    expression using the filter is compiled.

    Raises:
        DuplicateRegistrationError: If a filter with the same name already exists.
    """
    FilterRegistry().register(name, func)


def replace_filter(name: str, func: FilterFunction) -> None:
    """Replace an already registered filter with a new implementation.

    Raises:
        MissingRegistrationError: If no filter is registered under ``name``.
    """
    FilterRegistry().replace(name, func)


def override_filter(name: str, func: FilterFunction) -> None:
    """Install a filter under ``name`` regardless of what is registered there.

    Expressions compiled before the override keep the function they were
    compiled with.
    """
    FilterRegistry().override(name, func)


def apply_filter(
    name: str, value: Any, param: Any = None, bind: Mapping[str, Any] | None = None
) -> Value:
    """Apply a registered filter to a value.

    Args:
        name: Name of the filter.
        value: Input value (wrapped with ``as_value`` if needed).
        param: Filter parameter; None is passed to the filter as ``NIL``.
        bind: Bound variables handed through to the filter.

    Returns:
        Whatever the filter returns.

    Raises:
        UnknownFilterError: If no filter is registered under ``name``.
        Exception: Anything the filter itself raises, unchanged.
    """
    func = FilterRegistry().get(name)
    if func is None:
        raise UnknownFilterError(name, sender=SENDER_APPLY_FILTER)

    return func(as_value(value), as_value(param), bind if bind is not None else {})
