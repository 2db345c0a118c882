"""
Siteworks - Lifecycle Hooks

Extension points that run around the save/delete/load lifecycle of a
model type:

- before_save: after validation, before the repository write
- after_save: after the repository write, before cache invalidation
- before_delete / after_delete: around the repository delete
- load: after a model is read from the repository, before it is cached

Hooks are registered per model type and the service names the type it
dispatches for (e.g. every site content variant dispatches as
SiteContentBase). Callbacks run synchronously in registration order,
their return values are ignored, and exceptions propagate to the caller.

Usage:
    hooks = HookRegistry()

    @hooks.hook(Site, HookPoint.BEFORE_SAVE)
    def stamp(site: Site) -> None:
        site.last_modified = datetime.now(UTC)
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

HookCallback = Callable[[Any], None]


class HookPoint(str, Enum):
    BEFORE_SAVE = "before_save"
    AFTER_SAVE = "after_save"
    BEFORE_DELETE = "before_delete"
    AFTER_DELETE = "after_delete"
    LOAD = "load"


class HookRegistry:
    """Per-model-type lifecycle hook dispatcher."""

    def __init__(self) -> None:
        self._hooks: defaultdict[tuple[type, HookPoint], list[HookCallback]] = defaultdict(list)

    def register(self, model_type: type, point: HookPoint, callback: HookCallback) -> HookCallback:
        """
        Register a callback for a model type and lifecycle point.

        Args:
            model_type: The type the service dispatches for
            point: Lifecycle point
            callback: Called with the model instance

        Returns:
            The callback, so the method can back a decorator
        """
        self._hooks[(model_type, HookPoint(point))].append(callback)
        logger.debug(
            f"Registered {point} hook for {model_type.__name__}",
            extra={"model_type": model_type.__name__, "hook_point": str(point)},
        )
        return callback

    def hook(self, model_type: type, point: HookPoint) -> Callable[[HookCallback], HookCallback]:
        """Decorator form of register()."""

        def decorator(callback: HookCallback) -> HookCallback:
            return self.register(model_type, point, callback)

        return decorator

    def count(self, model_type: type, point: HookPoint) -> int:
        return len(self._hooks.get((model_type, HookPoint(point)), ()))

    def clear(self) -> None:
        self._hooks.clear()

    def _dispatch(self, model_type: type, point: HookPoint, model: Any) -> None:
        for callback in self._hooks.get((model_type, point), ()):
            callback(model)

    def on_before_save(self, model_type: type, model: Any) -> None:
        self._dispatch(model_type, HookPoint.BEFORE_SAVE, model)

    def on_after_save(self, model_type: type, model: Any) -> None:
        self._dispatch(model_type, HookPoint.AFTER_SAVE, model)

    def on_before_delete(self, model_type: type, model: Any) -> None:
        self._dispatch(model_type, HookPoint.BEFORE_DELETE, model)

    def on_after_delete(self, model_type: type, model: Any) -> None:
        self._dispatch(model_type, HookPoint.AFTER_DELETE, model)

    def on_load(self, model_type: type, model: Any) -> None:
        self._dispatch(model_type, HookPoint.LOAD, model)
