from .router import StateRouter

__all__ = ["StateRouter"]
