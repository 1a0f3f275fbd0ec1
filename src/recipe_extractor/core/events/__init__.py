"""Application lifecycle events."""

from .lifespan import lifespan


__all__ = ["lifespan"]
