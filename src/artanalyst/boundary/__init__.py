"""UI boundary: operation catalog, channel routing and error envelopes."""

from .channels import Channel
from .context import AppContext
from .operations import BoundaryDispatcher, BoundaryOperations
from .wrapper import BooleanBoundaryHandler, BoundaryHandler

__all__ = [
    "AppContext",
    "BooleanBoundaryHandler",
    "BoundaryDispatcher",
    "BoundaryHandler",
    "BoundaryOperations",
    "Channel",
]
