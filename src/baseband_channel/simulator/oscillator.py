"""Numerically controlled oscillator used for carrier offset."""

import numpy as np
import numpy.typing as npt

TWO_PI = 2 * np.pi


def wrap_phase(theta: float) -> float:
  """Wrap a phase in radians into [-pi, pi)."""
  return float((theta + np.pi) % TWO_PI - np.pi)


class Oscillator:
  """Complex oscillator with phase and frequency state.

  The frequency is expressed in radians per sample. Mixing a sample rotates it
  by the current phase and then advances the phase by one step.
  """

  def __init__(self, frequency: float = 0.0, phase: float = 0.0) -> None:
    self._frequency = float(frequency)
    self._phase = wrap_phase(phase)

  @property
  def frequency(self) -> float:
    """Frequency in radians/sample."""
    return self._frequency

  @property
  def phase(self) -> float:
    """Current phase in radians, wrapped into [-pi, pi)."""
    return self._phase

  def set_frequency(self, frequency: float) -> None:
    self._frequency = float(frequency)

  def set_phase(self, phase: float) -> None:
    self._phase = wrap_phase(phase)

  def step(self) -> None:
    """Advance the phase by one sample."""
    self._phase = wrap_phase(self._phase + self._frequency)

  def mix_up(self, sample: complex) -> complex:
    """Rotate ``sample`` by the current phase, then step."""
    y = complex(sample) * np.exp(1j * self._phase)
    self.step()
    return complex(y)

  def mix_down(self, sample: complex) -> complex:
    """Rotate ``sample`` by the negative current phase, then step."""
    y = complex(sample) * np.exp(-1j * self._phase)
    self.step()
    return complex(y)

  def _block_phases(self, n: int) -> npt.NDArray[np.float64]:
    phases = self._phase + self._frequency * np.arange(n, dtype=np.float64)
    self._phase = wrap_phase(self._phase + n * self._frequency)
    return phases

  def mix_up_block(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complexfloating]:
    """Block form of :meth:`mix_up`; advances the phase by ``len(signal)``."""
    rotation = np.exp(1j * self._block_phases(len(signal)))
    return (signal * rotation).astype(signal.dtype, copy=False)

  def mix_down_block(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complexfloating]:
    """Block form of :meth:`mix_down`; advances the phase by ``len(signal)``."""
    rotation = np.exp(-1j * self._block_phases(len(signal)))
    return (signal * rotation).astype(signal.dtype, copy=False)
