"""Application layer – animation driver and pipeline orchestration."""

from cartoon_studio.application.animator import AnimationDriver
from cartoon_studio.application.pipeline import CartoonPipeline

__all__ = ["AnimationDriver", "CartoonPipeline"]
