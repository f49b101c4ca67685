"""Stateful propagation channel for complex baseband signals.

The channel composes three independently configurable stages and applies the
enabled ones in a fixed, physically motivated order:

1. MULTIPATH: Fixed-tap FIR fading on the propagation path
2. CARRIER_OFFSET: Receiver-side frequency and phase offset
3. NOISE: Signal gain plus additive white Gaussian noise

Every stage keeps its state (filter delay line, oscillator phase) across
calls to :meth:`Channel.execute`, so a long stream may be fed in pieces.

Typical Usage:
  ```python
  from baseband_channel.simulator.channel import Channel

  with Channel(seed=1) as channel:
    channel.add_multipath(length=6)
    channel.add_carrier_offset(frequency=0.01, phase=0.3)
    channel.add_awgn(noise_floor_db=-60.0, snr_db=20.0)
    received = channel.execute(transmitted)
  ```
"""

import logging
from types import TracebackType
from typing import cast

import numpy as np
import numpy.typing as npt

from baseband_channel.config import MAX_MULTIPATH_TAPS, ChannelConfig
from baseband_channel.simulator.random_source import GaussianSource
from baseband_channel.simulator.stages import (
  CarrierOffsetStage,
  ChannelImpairment,
  ConfigurationError,
  MultipathStage,
  NoiseStage,
)

logger = logging.getLogger(__name__)


class Channel:
  """Composable multipath, carrier offset and AWGN channel.

  All stages start disabled; each ``add_*`` call enables its stage and fully
  replaces its parameters. The instance is not thread-safe: configuration
  and execution must be serialized by the caller.
  """

  def __init__(
    self,
    coefficients: npt.ArrayLike | None = None,
    *,
    seed: int | None = None,
    source: GaussianSource | None = None,
    max_multipath_taps: int = MAX_MULTIPATH_TAPS,
    dtype: npt.DTypeLike = np.complex128,
  ) -> None:
    """Initialize the channel with every stage disabled.

    Args:
      coefficients: Initial multipath response. Defaults to the identity
        response ``[1.0]``. It is stored but not enabled.
      seed: Seed for a new Gaussian source. Ignored when ``source`` is given.
      source: Gaussian source shared by the noise and multipath stages.
      max_multipath_taps: Upper bound on the multipath filter length.
      dtype: Complex dtype of the output samples.

    Raises:
      ConfigurationError: If ``coefficients`` is empty or the tap limit is
        not positive.
    """
    self.dtype = np.dtype(dtype)
    if self.dtype.kind != "c":
      msg = f"Channel dtype must be complex, got {self.dtype}"
      raise ConfigurationError(msg)

    self._source = source if source is not None else GaussianSource(seed)
    if coefficients is None:
      coefficients = (1.0,)

    multipath = MultipathStage(
      self._source, coefficients, max_taps=max_multipath_taps
    )
    carrier = CarrierOffsetStage()
    noise = NoiseStage(self._source)
    self._multipath: MultipathStage | None = multipath
    self._carrier: CarrierOffsetStage | None = carrier
    self._noise: NoiseStage | None = noise

    # Fixed processing order, never reconfigured
    self._stages: list[ChannelImpairment] | None = sorted(
      [noise, carrier, multipath], key=lambda x: x.stage
    )

  @classmethod
  def from_config(cls, config: ChannelConfig) -> "Channel":
    """Build a channel and apply every stage present in ``config``."""
    channel = cls(seed=config.seed, max_multipath_taps=config.max_multipath_taps)
    if config.multipath is not None:
      channel.add_multipath(config.multipath.coefficients, config.multipath.length)
    if config.carrier_offset is not None:
      channel.add_carrier_offset(
        config.carrier_offset.frequency, config.carrier_offset.phase
      )
    if config.noise is not None:
      channel.add_awgn(config.noise.noise_floor_db, config.noise.snr_db)
    return channel

  # --------------------------------------------------------------------------
  # Lifecycle
  # --------------------------------------------------------------------------

  @property
  def closed(self) -> bool:
    return self._stages is None

  def _check_open(self) -> list[ChannelImpairment]:
    if self._stages is None:
      msg = "Operation on a closed channel"
      raise ConfigurationError(msg)
    return self._stages

  def _open_multipath(self) -> MultipathStage:
    self._check_open()
    return cast(MultipathStage, self._multipath)

  def _open_carrier(self) -> CarrierOffsetStage:
    self._check_open()
    return cast(CarrierOffsetStage, self._carrier)

  def _open_noise(self) -> NoiseStage:
    self._check_open()
    return cast(NoiseStage, self._noise)

  def close(self) -> None:
    """Release the owned stages. Calling close twice is harmless."""
    if self._stages is None:
      return
    self._stages = None
    self._multipath = None
    self._carrier = None
    self._noise = None
    logger.debug("Channel closed")

  def __enter__(self) -> "Channel":
    return self

  def __exit__(
    self,
    exc_type: type[BaseException] | None,
    exc: BaseException | None,
    tb: TracebackType | None,
  ) -> None:
    self.close()

  # --------------------------------------------------------------------------
  # Configuration
  # --------------------------------------------------------------------------

  def add_awgn(self, noise_floor_db: float, snr_db: float) -> None:
    """Enable additive white Gaussian noise.

    Args:
      noise_floor_db: Noise power in dB.
      snr_db: Signal-to-noise ratio in dB relative to a unit-power input.
    """
    self._open_noise().configure(noise_floor_db, snr_db)

  def add_carrier_offset(self, frequency: float, phase: float = 0.0) -> None:
    """Enable carrier offset.

    Args:
      frequency: Carrier frequency offset in radians/sample.
      phase: Carrier phase offset in radians.
    """
    self._open_carrier().configure(frequency, phase)

  def add_multipath(
    self, coefficients: npt.ArrayLike | None = None, length: int | None = None
  ) -> None:
    """Enable multipath fading.

    A zero length is ignored with a warning and leaves the stage untouched.
    Otherwise the filter is rebuilt from scratch and its history is lost.

    Args:
      coefficients: Channel taps, or None for ``length`` random taps with a
        unity direct path.
      length: Number of taps. Defaults to ``len(coefficients)``.

    Raises:
      ConfigurationError: If the length is invalid or above the tap limit.
    """
    self._open_multipath().configure(coefficients, length)

  # --------------------------------------------------------------------------
  # State
  # --------------------------------------------------------------------------

  @property
  def multipath_enabled(self) -> bool:
    return self._open_multipath().enabled

  @property
  def carrier_enabled(self) -> bool:
    return self._open_carrier().enabled

  @property
  def noise_enabled(self) -> bool:
    return self._open_noise().enabled

  @property
  def coefficients(self) -> npt.NDArray[np.complex128]:
    return self._open_multipath().coefficients

  @property
  def frequency(self) -> float:
    return self._open_carrier().frequency

  @property
  def phase(self) -> float:
    return self._open_carrier().phase

  @property
  def gain(self) -> float:
    return self._open_noise().gain

  @property
  def noise_std(self) -> float:
    return self._open_noise().noise_std

  @property
  def noise_floor_db(self) -> float:
    return self._open_noise().noise_floor_db

  @property
  def snr_db(self) -> float:
    return self._open_noise().snr_db

  # --------------------------------------------------------------------------
  # Processing
  # --------------------------------------------------------------------------

  def execute(
    self,
    signal: npt.ArrayLike,
    out: npt.NDArray[np.complexfloating] | None = None,
  ) -> npt.NDArray[np.complexfloating]:
    """Apply every enabled stage to ``signal`` in the fixed order.

    Args:
      signal: 1-D complex baseband samples.
      out: Optional preallocated output array of the same length.

    Returns:
      Impaired samples, ``out`` when given.

    Raises:
      ConfigurationError: If the channel is closed, the input is not 1-D or
        ``out`` has the wrong length or a real dtype.
    """
    stages = self._check_open()
    result = np.array(signal, dtype=self.dtype, copy=True)
    if result.ndim != 1:
      msg = f"Expected a 1-D signal, got shape {result.shape}"
      raise ConfigurationError(msg)
    if out is not None and out.shape != result.shape:
      msg = f"Output shape {out.shape} does not match input shape {result.shape}"
      raise ConfigurationError(msg)
    if out is not None and out.dtype.kind != "c":
      msg = f"Output buffer must be complex, got {out.dtype}"
      raise ConfigurationError(msg)

    for impairment in stages:
      if impairment.enabled:
        result = impairment.apply(result)

    if out is None:
      return result
    out[:] = result
    return out

  # --------------------------------------------------------------------------
  # Reporting
  # --------------------------------------------------------------------------

  @property
  def name(self) -> str:
    """Human-readable description of the enabled stages."""
    stages = self._check_open()
    enabled = [imp.name for imp in stages if imp.enabled]
    return "_".join(enabled) if enabled else "Ideal"

  def describe(self) -> str:
    """Multi-line summary of every stage and its parameters."""
    multipath = self._open_multipath()
    carrier = self._open_carrier()
    noise = self._open_noise()

    def status(enabled: bool) -> str:
      return "enabled" if enabled else "disabled"

    taps = ", ".join(f"{h:.4g}" for h in multipath.coefficients)
    lines = [
      "channel",
      f"  multipath: {status(multipath.enabled)}",
      f"    taps ({len(multipath.coefficients)}): [{taps}]",
      f"  carrier offset: {status(carrier.enabled)}",
      f"    frequency: {carrier.frequency:.6g} rad/sample",
      f"    phase: {carrier.phase:.6g} rad",
      f"  AWGN: {status(noise.enabled)}",
      f"    noise floor: {noise.noise_floor_db:.2f} dB",
      f"    SNR: {noise.snr_db:.2f} dB",
      f"    gain: {noise.gain:.6g}",
      f"    noise std: {noise.noise_std:.6g}",
    ]
    return "\n".join(lines)

  def __repr__(self) -> str:
    if self.closed:
      return "Channel(closed)"
    return f"Channel({self.name})"
