"""Service registry — named construction recipes and shared instances.

Shared instances are cached by the recipe's factory, not by the name
used to ask for them: two names registered against the same class
resolve to one instance.

Usage::

    services.register("db", Database, ["sqlite:///app.db"], connect)
    services.resolve_shared("db")   # built once, cached
    services.resolve_fresh("db")    # built every time
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from skylark.core.callback import Callback, as_callback, construct, invoke
from skylark.errors import NotCallableError, ReservedNameError, ServiceResolutionError

logger = logging.getLogger("skylark.services")


@dataclass(frozen=True, slots=True)
class ServiceRecipe:
    """How to build a service: factory, positional args, post-init callback."""

    factory: Any
    args: tuple[Any, ...] = ()
    on_create: Callback | None = None


# Maps a name with no registered recipe to a recipe, or None
type Resolver = Callable[[str], ServiceRecipe | None]


def namespace_resolver(namespace: Mapping[str, Any]) -> Resolver:
    """Build a resolver that looks names up in *namespace*.

    The name is tried as given and with its first letter capitalised,
    so ``namespace_resolver({"Widget": Widget})`` answers ``"widget"``.
    """

    def resolve(name: str) -> ServiceRecipe | None:
        factory = namespace.get(name)
        if factory is None:
            factory = namespace.get(name[:1].upper() + name[1:])
        return ServiceRecipe(factory) if factory is not None else None

    return resolve


class ServiceRegistry:
    """Holds service recipes and the shared-instance cache."""

    __slots__ = ("_instances", "_recipes", "_reserved", "resolver")

    def __init__(
        self,
        resolver: Resolver | None = None,
        reserved: Iterable[str] = (),
    ) -> None:
        self.resolver = resolver
        self._recipes: dict[str, ServiceRecipe] = {}
        self._instances: dict[Any, Any] = {}
        self._reserved: frozenset[str] = frozenset(reserved)

    def register(
        self,
        name: str,
        factory: Any,
        args: Sequence[Any] = (),
        on_create: Any = None,
    ) -> None:
        """Record a recipe under *name*. Re-registering replaces it."""
        if name in self._reserved:
            raise ReservedNameError(name)
        callback = as_callback(on_create) if on_create is not None else None
        self._recipes[name] = ServiceRecipe(factory, tuple(args), callback)

    def has(self, name: str) -> bool:
        return name in self._recipes

    def recipe(self, name: str) -> ServiceRecipe:
        """Return the registered recipe, falling back to the resolver."""
        recipe = self._recipes.get(name)
        if recipe is None and self.resolver is not None:
            recipe = self.resolver(name)
        if recipe is None:
            raise ServiceResolutionError(name, "no recipe registered and none resolved")
        return recipe

    def resolve_shared(self, name: str) -> Any:
        """Return the cached instance for *name*, building it on first use."""
        return self._shared(name, self.recipe(name))

    def resolve_fresh(self, name: str) -> Any:
        """Build and return a new, uncached instance for *name*."""
        return self._build(name, self.recipe(name))

    def resolve_implicit(self, name: str) -> Any:
        """Resolve *name* through the resolver only, as a shared instance."""
        recipe = self.resolver(name) if self.resolver is not None else None
        if recipe is None:
            raise ServiceResolutionError(name, "resolver found no matching type")
        return self._shared(name, recipe)

    def load(self, name: str, shared: bool = True) -> Any:
        return self.resolve_shared(name) if shared else self.resolve_fresh(name)

    def seed(self, name: str, instance: Any) -> None:
        """Put a prebuilt *instance* in the shared cache for *name*'s recipe."""
        self._instances[self.recipe(name).factory] = instance

    def evict(self, *names: str) -> None:
        """Forget the shared instances behind *names*."""
        for name in names:
            recipe = self._recipes.get(name)
            if recipe is not None:
                self._instances.pop(recipe.factory, None)

    def clear(self) -> None:
        self._recipes.clear()
        self._instances.clear()

    # -- Construction --

    def _shared(self, name: str, recipe: ServiceRecipe) -> Any:
        key = recipe.factory
        if key not in self._instances:
            self._instances[key] = self._build(name, recipe)
        return self._instances[key]

    def _build(self, name: str, recipe: ServiceRecipe) -> Any:
        try:
            instance = construct(recipe.factory, recipe.args)
        except NotCallableError as exc:
            raise ServiceResolutionError(name, str(exc)) from exc
        except Exception as exc:
            raise ServiceResolutionError(name, f"{type(exc).__name__}: {exc}") from exc
        logger.debug("built service %r (%s)", name, getattr(recipe.factory, "__qualname__", recipe.factory))
        if recipe.on_create is not None:
            invoke(recipe.on_create, [instance])
        return instance
