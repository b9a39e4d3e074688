from .protocols import Hook, Publisher
from .types import Declaration, StateName

__all__ = ["Hook", "Publisher", "Declaration", "StateName"]
