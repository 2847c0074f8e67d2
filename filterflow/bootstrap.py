from typing import Any

from filterflow.filters.registry import FilterRegistry
from filterflow.logger import logger
from filterflow.settings import FilterFlowSettings


def bootstrap(settings_file: str | None = None, **overrides: Any) -> FilterFlowSettings:
    """Load settings, configure logging and register custom filters.

    Call this once at start-up, before compiling any expression, so compiled
    expressions bind to the final set of filters.

    Args:
        settings_file: Optional path to a settings YAML file.
        **overrides: Settings values overriding the file.

    Returns:
        The loaded settings.
    """
    settings = FilterFlowSettings.load(settings_file, **overrides)

    logger.set_level(settings.log_level)
    if settings.log_dir:
        logger.enable_file_logging("filterflow", settings.log_dir, settings.log_level)

    count = FilterRegistry.initialize_with_settings(settings)
    logger.info(f"FilterFlow ready: {len(FilterRegistry().registered_filters())} filters ({count} custom)")
    return settings
