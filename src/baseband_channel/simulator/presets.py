"""Standard library of pre-configured channel conditions.

Presets are expressed in sample-domain units: frequencies in radians/sample,
delays in samples and levels in dB. Each factory returns a ChannelConfig that
can be turned into a Channel with :meth:`Channel.from_config`.

Typical Usage:
  ```python
  from baseband_channel.simulator.channel import Channel
  from baseband_channel.simulator.presets import awgn, multipath

  # Use factory function with custom parameters
  channel = Channel.from_config(multipath.two_ray(delay=3, echo_gain=0.3j))

  # Or use pre-configured preset
  channel = Channel.from_config(awgn.SNR_10DB.config)
  ```
"""

from pydantic import BaseModel

from baseband_channel.config import (
  CarrierOffsetConfig,
  ChannelConfig,
  MultipathConfig,
  NoiseConfig,
)


class ChannelPreset(BaseModel):
  """A named channel configuration with metadata.

  Attributes:
    name: Human-readable preset name.
    description: Detailed description of channel characteristics.
    config: Channel configuration to apply.
  """

  name: str
  description: str
  config: ChannelConfig

  model_config = {"frozen": True}


def ideal() -> ChannelConfig:
  """Ideal channel: every stage disabled, output equals input."""
  return ChannelConfig()


# =============================================================================
# AWGN-Only Channels (Baseline/Testing)
# =============================================================================


class awgn:  # noqa: N801
  """AWGN-only channel presets for baseline testing."""

  SNR_30DB: ChannelPreset
  SNR_20DB: ChannelPreset
  SNR_10DB: ChannelPreset
  SNR_0DB: ChannelPreset

  @staticmethod
  def only(
    snr_db: float, noise_floor_db: float = -60.0, seed: int | None = None
  ) -> ChannelConfig:
    """Pure AWGN channel at specified SNR.

    Args:
      snr_db: Signal-to-noise ratio in dB.
      noise_floor_db: Noise floor in dB (default: -60 dB).
      seed: Random seed.

    Returns:
      Configuration with only the noise stage enabled.
    """
    return ChannelConfig(
      noise=NoiseConfig(noise_floor_db=noise_floor_db, snr_db=snr_db), seed=seed
    )


awgn.SNR_30DB = ChannelPreset(
  name="AWGN 30dB",
  description="Pure AWGN: SNR=30dB (excellent)",
  config=awgn.only(30.0),
)

awgn.SNR_20DB = ChannelPreset(
  name="AWGN 20dB",
  description="Pure AWGN: SNR=20dB (good)",
  config=awgn.only(20.0),
)

awgn.SNR_10DB = ChannelPreset(
  name="AWGN 10dB",
  description="Pure AWGN: SNR=10dB (moderate)",
  config=awgn.only(10.0),
)

awgn.SNR_0DB = ChannelPreset(
  name="AWGN 0dB",
  description="Pure AWGN: SNR=0dB (poor)",
  config=awgn.only(0.0),
)


# =============================================================================
# Multipath Channels
# =============================================================================


class multipath:  # noqa: N801
  """Fixed-tap multipath presets.

  The first tap is the direct path; later taps are delayed echoes.
  """

  TWO_RAY: ChannelPreset
  RANDOM_SHORT: ChannelPreset

  @staticmethod
  def two_ray(
    delay: int = 4, echo_gain: complex = 0.5j, seed: int | None = None
  ) -> ChannelConfig:
    """Direct path plus a single echo.

    Args:
      delay: Echo delay in samples (default: 4).
      echo_gain: Complex gain of the echo relative to the direct path.
      seed: Random seed.

    Returns:
      Configuration with only the multipath stage enabled.
    """
    if delay < 1:
      msg = f"Echo delay must be at least one sample, got {delay}"
      raise ValueError(msg)
    taps = [1.0 + 0j] + [0j] * (delay - 1) + [complex(echo_gain)]
    return ChannelConfig(multipath=MultipathConfig(coefficients=taps), seed=seed)

  @staticmethod
  def random(length: int = 6, seed: int | None = None) -> ChannelConfig:
    """Unity direct path followed by ``length - 1`` small random echoes.

    Args:
      length: Number of taps (default: 6).
      seed: Random seed.

    Returns:
      Configuration with only the multipath stage enabled.
    """
    return ChannelConfig(multipath=MultipathConfig(length=length), seed=seed)


multipath.TWO_RAY = ChannelPreset(
  name="Two-Ray",
  description="Direct path plus a -6dB echo in quadrature, 4 samples late",
  config=multipath.two_ray(),
)

multipath.RANDOM_SHORT = ChannelPreset(
  name="Random Short",
  description="Six random taps with a unity direct path",
  config=multipath.random(),
)


# =============================================================================
# Carrier Offset Channels
# =============================================================================


class offset:  # noqa: N801
  """Carrier frequency and phase offset presets."""

  SMALL_CFO: ChannelPreset

  @staticmethod
  def carrier(frequency: float = 0.01, phase: float = 0.0) -> ChannelConfig:
    """Pure carrier offset.

    Args:
      frequency: Frequency offset in radians/sample (default: 0.01).
      phase: Phase offset in radians (default: 0).

    Returns:
      Configuration with only the carrier offset stage enabled.
    """
    return ChannelConfig(
      carrier_offset=CarrierOffsetConfig(frequency=frequency, phase=phase)
    )


offset.SMALL_CFO = ChannelPreset(
  name="Small CFO",
  description="Carrier offset of 0.01 rad/sample, no phase offset",
  config=offset.carrier(),
)


# =============================================================================
# Combined Channels
# =============================================================================


def impaired(
  snr_db: float = 15.0,
  frequency: float = 0.005,
  phase: float = 0.0,
  length: int = 6,
  seed: int | None = None,
) -> ChannelConfig:
  """All three stages: random multipath, carrier offset and AWGN.

  Args:
    snr_db: Signal-to-noise ratio in dB (default: 15 dB).
    frequency: Carrier offset in radians/sample (default: 0.005).
    phase: Carrier phase offset in radians (default: 0).
    length: Number of multipath taps (default: 6).
    seed: Random seed.

  Returns:
    Configuration with every stage enabled.
  """
  return ChannelConfig(
    multipath=MultipathConfig(length=length),
    carrier_offset=CarrierOffsetConfig(frequency=frequency, phase=phase),
    noise=NoiseConfig(snr_db=snr_db),
    seed=seed,
  )


PRESETS: dict[str, ChannelPreset] = {
  "ideal": ChannelPreset(
    name="Ideal", description="No impairments", config=ideal()
  ),
  "awgn-30": awgn.SNR_30DB,
  "awgn-20": awgn.SNR_20DB,
  "awgn-10": awgn.SNR_10DB,
  "awgn-0": awgn.SNR_0DB,
  "two-ray": multipath.TWO_RAY,
  "random-short": multipath.RANDOM_SHORT,
  "small-cfo": offset.SMALL_CFO,
  "impaired": ChannelPreset(
    name="Impaired",
    description="Random multipath, 0.005 rad/sample CFO, SNR=15dB",
    config=impaired(),
  ),
}
