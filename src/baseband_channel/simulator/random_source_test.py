"""Tests for the Gaussian sample source."""

import numpy as np

from baseband_channel.simulator.random_source import GaussianSource


def test_deterministic_with_seed() -> None:
  """Test that equal seeds produce equal draws."""
  a = GaussianSource(seed=11)
  b = GaussianSource(seed=11)
  np.testing.assert_array_equal(a.complex_normal(64), b.complex_normal(64))
  assert a.next_standard_normal() == b.next_standard_normal()


def test_complex_normal_consumes_real_then_imaginary() -> None:
  """Test that each complex sample is built from consecutive draws."""
  draws = GaussianSource(seed=5).standard_normal(8)
  samples = GaussianSource(seed=5).complex_normal(4)
  np.testing.assert_array_equal(samples.real, draws[0::2])
  np.testing.assert_array_equal(samples.imag, draws[1::2])


def test_complex_normal_statistics() -> None:
  """Test that each component has unit variance."""
  samples = GaussianSource(seed=0).complex_normal(100000)
  assert abs(np.var(samples.real) - 1.0) < 0.02
  assert abs(np.var(samples.imag) - 1.0) < 0.02
  assert abs(np.mean(samples)) < 0.02


def test_wraps_existing_generator() -> None:
  """Test that an injected generator is used as-is."""
  rng = np.random.default_rng(9)
  expected = np.random.default_rng(9).standard_normal(3)
  np.testing.assert_array_equal(GaussianSource(rng=rng).standard_normal(3), expected)
