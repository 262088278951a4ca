"""Engine layer: the world loop."""

from umbra.engine.world_loop import WorldLoop

__all__ = ["WorldLoop"]
