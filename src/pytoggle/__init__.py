"""pytoggle - hybrid controlled/uncontrolled state for toggle components."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytoggle")
except PackageNotFoundError:
    __version__ = "0+local"
from pytoggle._multiplex import call_all
from pytoggle.config import ToggleConfig
from pytoggle.exceptions import (
    ToggleConfigError,
    ToggleConsumerError,
    ToggleError,
    ToggleSchemaError,
)
from pytoggle.provider import (
    DEFAULT_CONTEXT_VALUE,
    ToggleConsumer,
    ToggleContextValue,
    ToggleProvider,
)
from pytoggle.state.events import ChangeType, ControlOverrides, StateChanges
from pytoggle.state.policy import identity_reducer
from pytoggle.state.schema import TOGGLE_SCHEMA, FieldDescriptor, StateSchema
from pytoggle.toggle import Toggle

__all__ = [
    "__version__",
    "DEFAULT_CONTEXT_VALUE",
    "TOGGLE_SCHEMA",
    "ChangeType",
    "ControlOverrides",
    "FieldDescriptor",
    "StateChanges",
    "StateSchema",
    "Toggle",
    "ToggleConfig",
    "ToggleConfigError",
    "ToggleConsumer",
    "ToggleConsumerError",
    "ToggleContextValue",
    "ToggleError",
    "ToggleProvider",
    "ToggleSchemaError",
    "call_all",
    "identity_reducer",
]
