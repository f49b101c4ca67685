"""Seedable Gaussian sample source shared by the channel stages."""

import numpy as np
import numpy.typing as npt


class GaussianSource:
  """Draws standard-normal samples from a numpy Generator.

  A single source is shared by everything inside one channel (noise injection
  and random multipath taps), so seeding it makes a whole run reproducible.
  """

  def __init__(
    self, seed: int | None = None, rng: np.random.Generator | None = None
  ) -> None:
    """Initialize the source.

    Args:
      seed: Seed for a fresh generator. Ignored when ``rng`` is given.
      rng: Existing generator to draw from.
    """
    self._rng = rng if rng is not None else np.random.default_rng(seed)

  def next_standard_normal(self) -> float:
    """Draw a single N(0, 1) value."""
    return float(self._rng.standard_normal())

  def standard_normal(self, n: int) -> npt.NDArray[np.float64]:
    """Draw ``n`` independent N(0, 1) values."""
    return self._rng.standard_normal(n)

  def complex_normal(self, n: int) -> npt.NDArray[np.complex128]:
    """Draw ``n`` complex samples with N(0, 1) real and imaginary parts.

    Draws are consumed as (real, imaginary) pairs, one pair per sample.
    """
    pairs = self._rng.standard_normal(2 * n).reshape(n, 2)
    return pairs[:, 0] + 1j * pairs[:, 1]
