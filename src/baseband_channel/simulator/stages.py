"""Stateful impairment stages composed by the channel.

Each stage owns its own state (noise parameters, oscillator phase, filter
delay line) and is applied to whole blocks of complex baseband samples. State
carries over between blocks, so a stream split across several calls yields the
same output as a single call.
"""

import logging
from abc import ABC, abstractmethod
from enum import IntEnum

import numpy as np
import numpy.typing as npt

from baseband_channel.config import MAX_MULTIPATH_TAPS
from baseband_channel.simulator.fir_filter import FIRFilter
from baseband_channel.simulator.oscillator import Oscillator
from baseband_channel.simulator.random_source import GaussianSource

logger = logging.getLogger(__name__)


# Scale of the random echo taps following the direct path
RANDOM_TAP_SCALE = 0.05


class ConfigurationError(ValueError):
  """Raised when a channel or stage is configured with invalid parameters."""


class ImpairmentStage(IntEnum):
  """Defines the fixed order of channel impairments.

  1. MULTIPATH: Fading on the propagation path
  2. CARRIER_OFFSET: Receiver-side frequency and phase offset
  3. NOISE: Additive noise - always applied last
  """

  MULTIPATH = 1
  CARRIER_OFFSET = 2
  NOISE = 3


class ChannelImpairment(ABC):
  """Abstract base class for channel impairment stages.

  A stage starts disabled. Configuring it enables it; enabling or disabling a
  stage never resets its internal state.
  """

  def __init__(self) -> None:
    self.enabled = False

  @abstractmethod
  def apply(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complexfloating]:
    """Apply this impairment to the signal.

    Args:
      signal: Complex baseband signal.

    Returns:
      Impaired signal of the same length and dtype.
    """

  @property
  @abstractmethod
  def stage(self) -> ImpairmentStage:
    """The stage at which this impairment is applied."""

  @property
  @abstractmethod
  def name(self) -> str:
    """Human-readable name for this impairment."""


class NoiseStage(ChannelImpairment):
  """Additive white Gaussian noise with a fixed signal gain.

  The noise floor sets the noise standard deviation and the signal is scaled
  so that a unit-power input ends up ``snr_db`` above the floor:

    noise_std = 10^(noise_floor_db / 20)
    gain      = 10^((snr_db + noise_floor_db) / 20)
  """

  def __init__(
    self,
    source: GaussianSource,
    noise_floor_db: float = 0.0,
    snr_db: float = 0.0,
  ) -> None:
    super().__init__()
    self._source = source
    self._set_levels(noise_floor_db, snr_db)

  def _set_levels(self, noise_floor_db: float, snr_db: float) -> None:
    self._noise_floor_db = float(noise_floor_db)
    self._snr_db = float(snr_db)
    self._noise_std = 10 ** (self._noise_floor_db / 20)
    self._gain = 10 ** ((self._snr_db + self._noise_floor_db) / 20)

  def configure(self, noise_floor_db: float, snr_db: float) -> None:
    """Replace the noise parameters and enable the stage."""
    self._set_levels(noise_floor_db, snr_db)
    self.enabled = True
    logger.debug(
      f"AWGN configured: noise floor {self._noise_floor_db} dB, "
      f"SNR {self._snr_db} dB, gain {self._gain:.6g}, std {self._noise_std:.6g}"
    )

  @property
  def noise_floor_db(self) -> float:
    return self._noise_floor_db

  @property
  def snr_db(self) -> float:
    return self._snr_db

  @property
  def gain(self) -> float:
    """Linear signal gain derived from SNR and noise floor."""
    return self._gain

  @property
  def noise_std(self) -> float:
    """Noise standard deviation derived from the noise floor."""
    return self._noise_std

  def apply(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complexfloating]:
    """Scale the signal and add complex Gaussian noise."""
    # Total noise power is noise_std^2, split equally between I and Q
    noise = self._noise_std * self._source.complex_normal(len(signal)) * np.sqrt(0.5)
    return (signal * self._gain + noise).astype(signal.dtype, copy=False)

  @property
  def stage(self) -> ImpairmentStage:
    return ImpairmentStage.NOISE

  @property
  def name(self) -> str:
    return f"AWGN({self._snr_db}dB,floor={self._noise_floor_db}dB)"


class CarrierOffsetStage(ChannelImpairment):
  """Carrier frequency and phase offset.

  Models LO mismatch between transmitter and receiver using an owned
  oscillator. The frequency is in radians/sample and the phase in radians.
  """

  def __init__(self) -> None:
    super().__init__()
    self._oscillator = Oscillator()

  def configure(self, frequency: float, phase: float = 0.0) -> None:
    """Set oscillator frequency and phase, overwriting prior state."""
    self._oscillator.set_frequency(frequency)
    self._oscillator.set_phase(phase)
    self.enabled = True
    logger.debug(
      f"Carrier offset configured: {frequency} rad/sample, phase {phase} rad"
    )

  @property
  def frequency(self) -> float:
    return self._oscillator.frequency

  @property
  def phase(self) -> float:
    """Current oscillator phase; advances as samples are processed."""
    return self._oscillator.phase

  def apply(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complexfloating]:
    """Rotate the signal by the running oscillator phase."""
    return self._oscillator.mix_up_block(signal)

  @property
  def stage(self) -> ImpairmentStage:
    return ImpairmentStage.CARRIER_OFFSET

  @property
  def name(self) -> str:
    return f"CarrierOffset({self._oscillator.frequency}rad/sample)"


class MultipathStage(ChannelImpairment):
  """Multipath fading approximated by a fixed-tap FIR filter.

  The coefficient vector and the filter are always rebuilt together. Any
  reconfiguration replaces the filter, discarding its delay line.
  """

  def __init__(
    self,
    source: GaussianSource,
    coefficients: npt.ArrayLike = (1.0,),
    max_taps: int = MAX_MULTIPATH_TAPS,
  ) -> None:
    super().__init__()
    if max_taps < 1:
      msg = f"Maximum tap count must be positive, got {max_taps}"
      raise ConfigurationError(msg)
    h = np.array(coefficients, dtype=np.complex128).ravel()
    if h.size == 0:
      msg = "Multipath coefficients must contain at least one tap"
      raise ConfigurationError(msg)
    self._source = source
    self._max_taps = max_taps
    self._coefficients = h
    self._filter = FIRFilter(h)

  @property
  def max_taps(self) -> int:
    return self._max_taps

  @property
  def coefficients(self) -> npt.NDArray[np.complex128]:
    """Copy of the current filter coefficients."""
    return self._coefficients.copy()

  def _random_taps(self, length: int) -> npt.NDArray[np.complex128]:
    """Direct path at unity followed by small random echoes.

    Each echo is ``RANDOM_TAP_SCALE * (n_re + j * n_im)`` with independent
    standard normal parts, a circular complex Gaussian of expected power
    ``2 * RANDOM_TAP_SCALE**2`` (0.005, about -23 dB below the direct path).
    """
    h = np.empty(length, dtype=np.complex128)
    h[0] = 1.0
    h[1:] = RANDOM_TAP_SCALE * self._source.complex_normal(length - 1)
    return h

  def configure(
    self, coefficients: npt.ArrayLike | None = None, length: int | None = None
  ) -> None:
    """Replace the multipath response and enable the stage.

    Args:
      coefficients: Filter taps, or None to draw ``length`` random taps.
      length: Number of taps to use. Defaults to ``len(coefficients)``.

    Raises:
      ConfigurationError: If the length is negative, exceeds the tap limit,
        exceeds the supplied coefficients, or is missing for random taps.
    """
    supplied = None
    if coefficients is not None:
      supplied = np.array(coefficients, dtype=np.complex128).ravel()
      if length is None:
        length = supplied.size
    elif length is None:
      msg = "A tap count is required when generating random multipath taps"
      raise ConfigurationError(msg)

    if length == 0:
      logger.warning("Multipath filter length is zero, ignoring")
      return
    if length < 0:
      msg = f"Multipath filter length must not be negative, got {length}"
      raise ConfigurationError(msg)
    if length > self._max_taps:
      msg = (
        f"Multipath filter length {length} exceeds maximum of {self._max_taps}"
      )
      raise ConfigurationError(msg)
    if supplied is not None and length > supplied.size:
      msg = (
        f"Multipath filter length {length} exceeds the "
        f"{supplied.size} coefficients supplied"
      )
      raise ConfigurationError(msg)

    h = self._random_taps(length) if supplied is None else supplied[:length].copy()

    self._coefficients = h
    self._filter = FIRFilter(h)
    self.enabled = True
    logger.debug(f"Multipath configured with {length} taps")

  def apply(
    self, signal: npt.NDArray[np.complexfloating]
  ) -> npt.NDArray[np.complexfloating]:
    """Filter the signal through the multipath response."""
    return self._filter.filter(signal).astype(signal.dtype, copy=False)

  @property
  def stage(self) -> ImpairmentStage:
    return ImpairmentStage.MULTIPATH

  @property
  def name(self) -> str:
    return f"Multipath({self._coefficients.size} taps)"
