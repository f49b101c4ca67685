"""Finite impulse response filter with a persistent delay line."""

import numpy as np
import numpy.typing as npt
from scipy import signal as scipy_signal


class FIRFilter:
  """Direct-form FIR filter.

  The output is ``y[n] = sum(h[k] * x[n - k])``. The delay line survives
  between calls, so a stream can be filtered sample by sample with
  :meth:`push`/:meth:`execute` or in blocks with :meth:`filter`, and both
  forms may be mixed freely.
  """

  def __init__(self, taps: npt.ArrayLike) -> None:
    """Initialize the filter.

    Args:
      taps: Filter coefficients, at least one.
    """
    h = np.array(taps, dtype=np.complex128).ravel()
    if h.size == 0:
      msg = "FIR filter needs at least one tap"
      raise ValueError(msg)
    self._taps = h
    # Most recent sample last
    self._window = np.zeros(h.size, dtype=np.complex128)

  def __len__(self) -> int:
    return self._taps.size

  @property
  def taps(self) -> npt.NDArray[np.complex128]:
    """Copy of the filter coefficients."""
    return self._taps.copy()

  def reset(self) -> None:
    """Clear the delay line."""
    self._window[:] = 0

  def push(self, sample: complex) -> None:
    """Shift ``sample`` into the delay line."""
    self._window[:-1] = self._window[1:]
    self._window[-1] = sample

  def execute(self) -> complex:
    """Compute the output for the current delay line contents."""
    return complex(np.dot(self._taps, self._window[::-1]))

  def filter(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complex128]:
    """Push every sample of ``signal`` and return one output per sample."""
    n = len(signal)
    if n == 0:
      return np.zeros(0, dtype=np.complex128)

    history = self._window[1:]
    extended = np.concatenate((history, np.asarray(signal, dtype=np.complex128)))
    output = scipy_signal.convolve(
      extended, self._taps, mode="valid", method="direct"
    )

    self._window = extended[-self._taps.size :].copy()
    return output
