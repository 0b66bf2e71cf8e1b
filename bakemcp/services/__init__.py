"""
Services Package

Orchestration of the generator pipeline.
"""

from bakemcp.services.bake import BakeRequest, BakeResult, bake

__all__ = [
    "BakeRequest",
    "BakeResult",
    "bake",
]
