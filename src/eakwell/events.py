"""
Event handling for eakwell

EventHub gives any object named publish/subscribe without taking part in
an inheritance hierarchy: hold one (``self.events = EventHub()``) or list
it among the base classes. Emitter is the structural interface for code
that only needs "something that emits".

Handlers are matched for removal by identity. A bound method accessed twice
yields two distinct objects, so keep the callable returned by ``on`` or
``once`` and pass that same object to ``off``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple, Union, runtime_checkable

from .iteration import partition

logger = logging.getLogger(__name__)

LISTENER_ADDED = "listenerAdded"
LISTENER_REMOVED = "listenerRemoved"

Handler = Callable[..., Any]
Actions = Union[str, Iterable[str]]


@dataclass(eq=False)
class Listener:
    """A single (action, callback) registration"""
    action: str
    callback: Handler


@runtime_checkable
class Emitter(Protocol):
    """Structural interface of an event emitting object"""

    def on(self, actions: Actions, callback: Handler) -> Handler: ...

    def off(self, callback: Handler) -> "Emitter": ...

    def once(self, actions: Actions, callback: Handler) -> Handler: ...

    def emit(self, action: str, *args: Any) -> "Emitter": ...

    def proxy(self, other: "Emitter", action: str) -> Handler: ...

    def discard_event_handlers(self, silent: bool = False) -> "Emitter": ...


def _split_actions(actions: Actions) -> List[str]:
    if isinstance(actions, str):
        return actions.split()
    return list(actions)


class EventHub:
    """
    Ordered listener registry with snapshot emission

    Listeners fire in registration order. ``emit`` works on a copy of the
    listener list taken when it starts, so handlers may register or remove
    listeners (including themselves) while an emission is running: new
    listeners wait for the next emission, removed ones still fire in this one.

    The listener list is created lazily, so subclasses do not need to call
    ``EventHub.__init__``.
    """

    _listeners: List[Listener]

    def __init__(self) -> None:
        self._listeners = []

    @property
    def _registry(self) -> List[Listener]:
        try:
            return self._listeners
        except AttributeError:
            self._listeners = []
            return self._listeners

    def on(self, actions: Actions, callback: Handler) -> Handler:
        """Register <callback> for every action named in <actions>"""
        for action in _split_actions(actions):
            self._registry.append(Listener(action, callback))
            logger.debug(f"Listener added for '{action}' on {type(self).__name__}")
            self.emit(LISTENER_ADDED, action, callback)
        return callback

    def off(self, callback: Handler) -> "EventHub":
        """Remove <callback> from all actions it was registered for"""
        registry = self._registry
        for i in range(len(registry) - 1, -1, -1):
            listener = registry[i]
            if listener.callback is callback:
                del registry[i]
                logger.debug(f"Listener removed for '{listener.action}' on {type(self).__name__}")
                self.emit(LISTENER_REMOVED, listener.action, callback)
        return self

    def once(self, actions: Actions, callback: Handler) -> Handler:
        """
        Register <callback> to run on the next occurrence of any of <actions>

        The returned wrapper is what gets registered; pass it to ``off`` to
        cancel before it fires.
        """
        def handler(*args: Any) -> Any:
            self.off(handler)
            return callback(*args)

        return self.on(actions, handler)

    def emit(self, action: str, *args: Any) -> "EventHub":
        """Call every handler listening to <action> with <args>"""
        snapshot = list(self._registry)
        for listener in snapshot:
            if listener.action == action:
                listener.callback(*args)
        return self

    def proxy(self, other: Emitter, action: str) -> Handler:
        """
        Re-emit <action> events of <other> on this hub

        Returns the forwarding handler; ``other.off(handle)`` stops it.
        """
        def forward(*args: Any) -> None:
            self.emit(action, *args)

        return other.on(action, forward)

    def discard_event_handlers(self, silent: bool = False) -> "EventHub":
        """
        Drop all listeners

        Unless <silent>, removal notifications are sent for every regular
        listener before the LISTENER_REMOVED handlers themselves are removed.
        """
        if silent:
            self._listeners = []
            return self

        removal_watchers, regular = partition(
            self._registry, lambda listener, _: listener.action == LISTENER_REMOVED
        )

        for listener in regular:
            self.off(listener.callback)
        for listener in removal_watchers:
            self.off(listener.callback)

        return self

    def listeners(self, action: Optional[str] = None) -> Tuple[Listener, ...]:
        """Return the current registrations, optionally only those for <action>"""
        if action is None:
            return tuple(self._registry)
        return tuple(l for l in self._registry if l.action == action)
