"""Engine layer - the batching core.

The classifier decides boundaries, the buffer accumulates commands, and
the dispatcher fans each closed bulk out to the live subscribers.
Engine code may import from domain and sinks.base only.
"""

from bulkctl.engine.buffer import BulkBuffer, wall_clock
from bulkctl.engine.classifier import Classifier, Step
from bulkctl.engine.dispatcher import Dispatcher, DispatchStats
from bulkctl.engine.registry import SubscriberRegistry

__all__ = [
    "BulkBuffer",
    "Classifier",
    "DispatchStats",
    "Dispatcher",
    "Step",
    "SubscriberRegistry",
    "wall_clock",
]
