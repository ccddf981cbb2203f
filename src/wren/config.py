"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(segment_aware_middleware=True, log_routes=True)
    """

    # HTTP methods a route may be declared for
    methods: tuple[str, ...] = ("GET", "POST", "PUT", "PATCH", "DELETE")

    # Source-file suffixes stripped from the last token of a specification
    extensions: tuple[str, ...] = (".py", ".ts", ".tsx", ".js", ".jsx")

    # Trailing file-role tokens stripped before classification
    reserved_names: tuple[str, ...] = ("page", "route", "index")

    # Middleware scoping: False = literal string prefix on the canonical
    # pattern ("/user" also covers "/users"), True = whole segments only
    segment_aware_middleware: bool = False

    # Log the full route listing at INFO after each compile
    log_routes: bool = False

    def __post_init__(self) -> None:
        if not self.methods:
            msg = "RouterConfig.methods must name at least one HTTP method."
            raise ConfigurationError(msg)
        for method in self.methods:
            if method != method.upper():
                msg = f"RouterConfig.methods must be upper-case, got {method!r}."
                raise ConfigurationError(msg)
        for ext in self.extensions:
            if not ext.startswith("."):
                msg = f"RouterConfig.extensions entries must start with '.', got {ext!r}."
                raise ConfigurationError(msg)
