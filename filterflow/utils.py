import importlib.util
import inspect
from pathlib import Path
from types import ModuleType
from typing import Any

from filterflow.exceptions import CoreError

FILTER_FUNCTION_ARITY = 3


def import_module_from_path(module_name: str, module_path: str | Path) -> ModuleType:
    """
    Import a module from a given file path.

    Args:
        module_name: Name to assign to the module.
        module_path: Path to the module file.

    Returns:
        Imported module.

    Raises:
        CoreError: If there is an error importing the module.
    """
    try:
        spec = importlib.util.spec_from_file_location(module_name, str(module_path))
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    except Exception as e:
        raise CoreError(
            f"Failed to import module '{module_name}' from '{module_path}': {e!s}",
            component="ModuleLoader",
        ) from e


def is_filter_function(attr: Any) -> bool:
    """
    Check if an attribute looks like a filter function.

    A filter function is a public, plain function that accepts exactly three
    positional parameters: the input value, the parameter and the bound variables.

    Args:
        attr: Attribute to check.

    Returns:
        True if the attribute can be registered as a filter.
    """
    if not inspect.isfunction(attr) or attr.__name__.startswith("_"):
        return False

    try:
        params = inspect.signature(attr).parameters.values()
    except (TypeError, ValueError):
        return False

    positional = [
        p for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return len(positional) == FILTER_FUNCTION_ARITY
