"""
FilterFlow exception hierarchy.

This module defines the core exceptions used throughout the FilterFlow package,
organized hierarchically with clear inheritance paths.
"""

from typing import Any

###############################################################################
# ROOT EXCEPTION
###############################################################################


class FilterFlowError(Exception):
    """
    Root exception class for all FilterFlow errors.

    This exception serves as the base class for the entire exception hierarchy.
    It should never be raised directly but rather inherited from.
    """


###############################################################################
# CORE EXCEPTIONS
###############################################################################


class CoreError(FilterFlowError):
    """
    Base exception class for core functionality errors.

    These relate to fundamental operations of the FilterFlow package itself.
    """

    def __init__(self, message: str = "", component: str = ""):
        prefix = f"{component}: " if component else ""
        super().__init__(f"{prefix}{message}")
        self.component = component


class RegistryError(CoreError):
    """Base for all filter registry errors."""

    def __init__(self, message: str = "", filter_name: str = ""):
        super().__init__(message, component="FilterRegistry")
        self.filter_name = filter_name


class DuplicateRegistrationError(RegistryError):
    """Raised when registering a filter under a name that is already taken."""

    def __init__(self, filter_name: str):
        super().__init__(f"filter with name '{filter_name}' is already registered", filter_name=filter_name)


class MissingRegistrationError(RegistryError):
    """Raised when replacing a filter that was never registered."""

    def __init__(self, filter_name: str):
        super().__init__(
            f"filter with name '{filter_name}' does not exist (therefore cannot be replaced)",
            filter_name=filter_name,
        )


###############################################################################
# SETTINGS EXCEPTIONS
###############################################################################


class SettingsError(FilterFlowError):
    """
    Base exception class for settings-related errors.

    These relate to configuration and settings management.
    """

    def __init__(self, message: str = "", setting: str = ""):
        prefix = f"Setting '{setting}': " if setting else ""
        super().__init__(f"{prefix}{message}")
        self.setting = setting


###############################################################################
# RESOURCE EXCEPTIONS
###############################################################################


class ResourceError(FilterFlowError):
    """
    Base exception class for resource access errors.

    These relate to file, module, and other resource access issues.
    """

    def __init__(self, message: str = "", resource_type: str = "", resource_name: str = ""):
        prefix = f"{resource_type} '{resource_name}': " if resource_type and resource_name else ""
        super().__init__(f"{prefix}{message}")
        self.resource_type = resource_type
        self.resource_name = resource_name


###############################################################################
# TEMPLATE EXCEPTIONS
###############################################################################


class TemplateError(FilterFlowError):
    """
    Base exception class for errors raised while parsing or evaluating expressions.

    Carries the component that raised it (``sender``), the underlying cause
    (``orig_error``) and, once known, the source location it refers to. The
    location can be attached after the fact with ``update_from_token_if_needed``,
    which is how filter functions can raise location-less errors and still
    surface pointing at the filter call that failed.
    """

    def __init__(
        self,
        message: str = "",
        sender: str = "",
        orig_error: BaseException | None = None,
        template_name: str = "",
        line: int = 0,
        column: int = 0,
        token: Any = None,
    ):
        super().__init__(message)
        self.message = message or (str(orig_error) if orig_error else "")
        self.sender = sender
        self.orig_error = orig_error
        self.template_name = template_name
        self.line = line
        self.column = column
        self.token = token

    @property
    def has_location(self) -> bool:
        """Whether a source location has been attached to this error."""
        return self.line > 0

    def update_from_token_if_needed(self, template_name: str, token: Any) -> "TemplateError":
        """Attach template name and token location unless a location is already set.

        Args:
            template_name: Identity of the template/expression being rendered.
            token: Token whose position should be reported.

        Returns:
            The same error instance, for ``raise err.update_from_token_if_needed(...)``.
        """
        if self.has_location or token is None:
            return self
        self.template_name = self.template_name or template_name
        self.line = token.line
        self.column = token.col
        self.token = token
        return self

    def __str__(self) -> str:
        parts = []
        if self.sender:
            parts.append(f"where: {self.sender}")
        if self.template_name:
            parts.append(f"in {self.template_name}")
        if self.has_location:
            near = f" near '{self.token.val}'" if self.token is not None and self.token.val else ""
            parts.append(f"Line {self.line} Col {self.column}{near}")

        header = f"[Error ({' | '.join(parts)})] " if parts else ""
        return f"{header}{self.message}"


class TemplateSyntaxError(TemplateError):
    """Raised when an expression cannot be lexed or parsed."""


class MissingArgumentError(TemplateSyntaxError):
    """Raised when a filter argument separator is not followed by an argument."""


class UnknownFilterError(TemplateError):
    """Raised when a filter name does not resolve to a registered filter."""

    def __init__(self, filter_name: str, sender: str = "", **kwargs):
        super().__init__(f"filter with name '{filter_name}' not found", sender=sender, **kwargs)
        self.filter_name = filter_name


class FilterExecutionError(TemplateError):
    """Raised when a filter function fails with an exception of its own."""
