import itertools
import math

import numpy as np
import pytest
from scipy import stats

from core.errors import SamplingError
from distributions.sampler import (
    GeneratorUniformSource,
    NormalSampler,
    SequenceUniformSource,
    sample_normals,
    spawn_uniform_sources,
)


def test_box_muller_known_value():
    sampler = NormalSampler(SequenceUniformSource([math.exp(-0.5), 0.5]))
    assert next(sampler) == pytest.approx(-1.0)


def test_zero_draws_are_redrawn():
    # leading zeros for both u and v are skipped
    source = SequenceUniformSource([0.0, 0.0, math.exp(-0.5), 0.0, 0.5])
    assert next(NormalSampler(source)) == pytest.approx(-1.0)


def test_persistent_zero_source_is_fatal():
    sampler = NormalSampler(SequenceUniformSource([0.0], cycle=True), max_retries=5)
    with pytest.raises(SamplingError):
        next(sampler)


@pytest.mark.parametrize("bad", [1.0, 1.5, -0.1, float("nan")])
def test_out_of_range_uniform_is_fatal(bad):
    with pytest.raises(SamplingError):
        next(NormalSampler(SequenceUniformSource([bad], cycle=True)))


def test_exhausted_sequence_is_fatal():
    # one value is not enough for the two draws a deviate needs
    with pytest.raises(SamplingError):
        next(NormalSampler(SequenceUniformSource([0.3])))


def test_sampler_is_lazy_and_infinite():
    sampler = NormalSampler(SequenceUniformSource([0.2, 0.7, 0.9, 0.4], cycle=True))
    values = list(itertools.islice(sampler, 1000))
    assert len(values) == 1000
    # the cycled source repeats every two deviates
    assert values[0] == values[2] == values[998]


def test_take_returns_array():
    out = NormalSampler(GeneratorUniformSource(seed=1)).take(5)
    assert isinstance(out, np.ndarray)
    assert out.shape == (5,)


def test_seeded_sampler_is_reproducible():
    a = NormalSampler(GeneratorUniformSource(seed=3)).take(50)
    b = NormalSampler(GeneratorUniformSource(seed=3)).take(50)
    np.testing.assert_array_equal(a, b)


def test_spawned_sources_are_reproducible_and_distinct():
    first = [src() for src in spawn_uniform_sources(11, 4)]
    again = [src() for src in spawn_uniform_sources(11, 4)]
    assert first == again
    assert len(set(first)) == 4


def test_moments_match_standard_normal():
    z = sample_normals(12345, 20_000)
    assert abs(z.mean()) < 0.05
    assert abs(z.std() - 1.0) < 0.05


def test_distribution_passes_ks_test():
    z = sample_normals(7, 5_000)
    result = stats.kstest(z, "norm")
    assert result.pvalue > 1e-3


def test_invalid_retry_budget():
    with pytest.raises(ValueError):
        NormalSampler(GeneratorUniformSource(seed=0), max_retries=0)
