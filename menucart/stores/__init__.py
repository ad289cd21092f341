# Client-side state stores

from .carts import CartStore
from .staging import StagingQuantityTracker

__all__ = [
    "CartStore",
    "StagingQuantityTracker",
]
