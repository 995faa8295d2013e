"""
Normal Sampler: standard normal deviates from an injectable uniform source.

A uniform source is any zero-argument callable returning floats in [0, 1).
Each normal deviate consumes two uniform draws (Box–Muller, cosine branch):

    z = sqrt(-2 ln u) * cos(2 pi v)

A draw of exactly 0 is re-drawn so ln(0) is never taken. A source that keeps
returning 0, or returns anything outside [0, 1), is broken and raises
SamplingError.

Usage:
    sampler = NormalSampler(GeneratorUniformSource(seed=42))
    z = next(sampler)
    first_ten = sampler.take(10)

Per-trial independent streams come from spawn_uniform_sources(), which splits
one numpy SeedSequence into n child generators. Trial k always gets stream k,
whatever order (or thread) the trials run in.
"""

from __future__ import annotations

import itertools
import math
from typing import Callable, Iterable, Iterator, List, Optional

import numpy as np

from core.config import MAX_UNIFORM_RETRIES
from core.errors import SamplingError

UniformSource = Callable[[], float]


class GeneratorUniformSource:
    """Uniform draws in [0, 1) from a numpy Generator (PCG64)."""

    def __init__(
        self,
        seed: Optional[int] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def __call__(self) -> float:
        return float(self.rng.random())


class SequenceUniformSource:
    """
    Replays a fixed sequence of uniform values.

    With cycle=True the sequence repeats forever; otherwise running out is a
    SamplingError, like any other broken source.
    """

    def __init__(self, values: Iterable[float], *, cycle: bool = False):
        self.values: List[float] = [float(v) for v in values]
        if not self.values:
            raise ValueError("SequenceUniformSource needs at least one value.")
        self._it: Iterator[float] = (
            itertools.cycle(self.values) if cycle else iter(self.values)
        )

    def __call__(self) -> float:
        try:
            return next(self._it)
        except StopIteration:
            raise SamplingError(
                f"Uniform sequence exhausted after {len(self.values)} draws."
            ) from None


def spawn_uniform_sources(seed: Optional[int], n: int) -> List[GeneratorUniformSource]:
    """
    Create n statistically independent uniform sources from one seed.

    seed=None draws fresh OS entropy (non-reproducible, for production runs).
    """
    children = np.random.SeedSequence(seed).spawn(n)
    return [
        GeneratorUniformSource(rng=np.random.Generator(np.random.PCG64(child)))
        for child in children
    ]


class NormalSampler:
    """Lazy, infinite iterator of standard normal deviates."""

    def __init__(self, uniform: UniformSource, *, max_retries: int = MAX_UNIFORM_RETRIES):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.uniform = uniform
        self.max_retries = max_retries

    def __iter__(self) -> "NormalSampler":
        return self

    def __next__(self) -> float:
        u = self._nonzero_uniform()
        v = self._nonzero_uniform()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def take(self, n: int) -> np.ndarray:
        """Draw the next n deviates as an array."""
        return np.fromiter(itertools.islice(self, n), dtype=float, count=n)

    def _nonzero_uniform(self) -> float:
        for _ in range(self.max_retries):
            u = float(self.uniform())
            if not 0.0 <= u < 1.0:
                raise SamplingError(f"Uniform source returned {u!r}, outside [0, 1).")
            if u > 0.0:
                return u
        raise SamplingError(
            f"Uniform source returned 0 on {self.max_retries} consecutive draws."
        )


def sample_normals(seed: Optional[int], n: int) -> np.ndarray:
    """Convenience: n standard normal deviates from a freshly seeded source."""
    return NormalSampler(GeneratorUniformSource(seed)).take(n)
