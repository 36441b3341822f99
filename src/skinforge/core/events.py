"""EventBus for decoupled publish/subscribe communication."""

from enum import Enum, auto
from typing import Any, Callable
from collections import defaultdict


class SkinEventType(Enum):
    # Model lifecycle
    MODEL_REBUILT = auto()     # data: variant (ModelVariant), texture_height (int)

    # Layer visibility
    LAYER_TOGGLED = auto()     # data: part (BodyPartKey), layer (LayerKind), visible (bool)


class EventBus:
    """Simple publish/subscribe event system."""

    def __init__(self):
        self._handlers: dict[SkinEventType, list[Callable]] = defaultdict(list)

    def subscribe(self, event_type: SkinEventType, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: SkinEventType, handler: Callable) -> None:
        handlers = self._handlers[event_type]
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: SkinEventType, **data: Any) -> None:
        for handler in self._handlers[event_type]:
            handler(**data)

    def clear(self) -> None:
        self._handlers.clear()
