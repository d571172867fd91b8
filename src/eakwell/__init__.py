"""eakwell - small utility library: collection helpers, event hub, timing combinators and JSON requests"""

__version__ = "0.1.0"

from eakwell.events import EventHub, Emitter, Listener, LISTENER_ADDED, LISTENER_REMOVED
from eakwell.timing import throttle, auto_throttle, defer, delay, wait_for
from eakwell.promises import promise_from, resolve_promises
from eakwell.ajax import ajax, AjaxOptions
from eakwell.errors import EakwellError, AjaxError, ConfigurationError, ErrorCode
from eakwell.config import EakwellConfig, get_config, set_config, load_config

__all__ = [
    "EventHub",
    "Emitter",
    "Listener",
    "LISTENER_ADDED",
    "LISTENER_REMOVED",
    "throttle",
    "auto_throttle",
    "defer",
    "delay",
    "wait_for",
    "promise_from",
    "resolve_promises",
    "ajax",
    "AjaxOptions",
    "EakwellError",
    "AjaxError",
    "ConfigurationError",
    "ErrorCode",
    "EakwellConfig",
    "get_config",
    "set_config",
    "load_config",
]
