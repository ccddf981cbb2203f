"""Wren exception hierarchy.

Shared across the parser, router, and dispatcher so every module
raises and catches the same types.

A failed match is *not* an exception: ``Router.match`` returns a
:class:`~wren.routing.route.NotFound` value instead.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when router configuration or a declaration is invalid.

    Covers unsupported HTTP methods and malformed config values.
    """


class InvalidSpecification(WrenError):
    """A path specification could not be parsed.

    Raised per specification: the offending declaration is rejected,
    the rest of the batch keeps compiling.
    """

    def __init__(self, specification: str, reason: str) -> None:
        self.specification = specification
        self.reason = reason
        super().__init__(f"Invalid route specification {specification!r}: {reason}")


class NotReady(WrenError):
    """``match()`` was called before a routing table was compiled."""

    def __init__(self, detail: str = "Routing table has not been compiled.") -> None:
        super().__init__(detail)


class AlreadyCompiled(WrenError, RuntimeError):
    """``register()`` or ``bind()`` was called on a compiled router.

    Call ``reset()`` to start a new compile cycle.
    """

    def __init__(self, detail: str = "Cannot register routes after compilation.") -> None:
        super().__init__(detail)
