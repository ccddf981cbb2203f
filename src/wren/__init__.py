"""Wren: filesystem-shaped route specifications, compiled into a routing table.

Directory and file names encode URL structure::

    app/
      (marketing)/about/page.tsx     GET  /about
      users/[id]/route.py            *    /users/:id
      docs/[...slug]/page.py         GET  /docs/*slug
      admin/_middleware.py           middleware for /admin...

Basic usage::

    from wren import Router

    router = Router()
    router.add("users/[id]/route.py", "GET", show_user)
    router.compile()

    result = router.match("GET", "/users/42")
    if result:
        result.handler, result.params   # show_user, {"id": "42"}

Walking the filesystem and loading modules is left to the caller.
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "AlreadyCompiled",
    "CompiledRoute",
    "ConfigurationError",
    "Dispatcher",
    "InvalidSpecification",
    "MatchResult",
    "MiddlewareBinding",
    "NotFound",
    "NotReady",
    "RouteDeclaration",
    "Router",
    "RouterConfig",
    "RoutingTable",
    "WrenError",
    "build_table",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "RouterConfig":
        from wren.config import RouterConfig

        return RouterConfig

    if name in ("AlreadyCompiled", "ConfigurationError", "InvalidSpecification", "NotReady", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    if name in (
        "CompiledRoute",
        "Dispatcher",
        "MatchResult",
        "MiddlewareBinding",
        "NotFound",
        "RouteDeclaration",
        "Router",
        "RoutingTable",
        "build_table",
    ):
        from wren import routing as _routing

        return getattr(_routing, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
