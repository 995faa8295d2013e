"""
Distributions package: uniform sources and the Box–Muller normal sampler.
"""

from .sampler import (
    GeneratorUniformSource,
    NormalSampler,
    SequenceUniformSource,
    UniformSource,
    sample_normals,
    spawn_uniform_sources,
)

__all__ = [
    "GeneratorUniformSource",
    "NormalSampler",
    "SequenceUniformSource",
    "UniformSource",
    "sample_normals",
    "spawn_uniform_sources",
]
