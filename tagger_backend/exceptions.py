"""
Exceptions raised by the Tagger backend.

Only startup and configuration problems are exceptions. A missing record is
reported by repositories as ``None``/``False`` and turned into a 404 by the
HTTP layer; MongoDB driver errors during requests propagate unchanged.
"""

from typing import Any, Dict, Optional


class TaggerBackendError(RuntimeError):
    """
    Base class. ``context`` holds key/value details that are appended to
    the message when the error is rendered.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{self.message} (context: {details})"


class InitializationError(TaggerBackendError):
    """The MongoDB client could not be opened or did not answer the startup ping."""

    def __init__(
        self,
        message: str,
        mongo_uri: Optional[str] = None,
        db_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        details = dict(context or {})
        if mongo_uri:
            details["mongo_uri"] = mongo_uri
        if db_name:
            details["db_name"] = db_name
        super().__init__(message, context=details)


class ConfigurationError(TaggerBackendError):
    """
    A setting is missing or out of range.

    Attributes:
        config_key: Name of the offending setting, when known
        config_value: Its rejected value, when there is one
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.config_key = config_key
        self.config_value = config_value
        details = dict(context or {})
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = config_value
        super().__init__(message, context=details)
