"""Application lifecycle events."""

from healthymeal.core.events.lifespan import lifespan


__all__ = ["lifespan"]
