"""Configuration models for baseband channels."""

from pydantic import BaseModel, Field, model_validator

# Upper bound on multipath filter length
MAX_MULTIPATH_TAPS = 1000


class NoiseConfig(BaseModel):
  """Additive white Gaussian noise settings.

  Attributes:
    noise_floor_db: Noise power in dB; sets the noise standard deviation.
    snr_db: Signal-to-noise ratio in dB for a unit-power input.
  """

  noise_floor_db: float = Field(-60.0, description="Noise floor in dB.")
  snr_db: float = Field(..., description="Signal-to-noise ratio in dB.")

  model_config = {"frozen": True}


class CarrierOffsetConfig(BaseModel):
  """Carrier frequency and phase offset settings.

  Attributes:
    frequency: Frequency offset in radians/sample.
    phase: Initial phase offset in radians.
  """

  frequency: float = Field(..., description="Frequency offset [rad/sample].")
  phase: float = Field(0.0, description="Phase offset [rad].")

  model_config = {"frozen": True}


class MultipathConfig(BaseModel):
  """Multipath filter settings.

  Attributes:
    coefficients: Explicit filter taps, or None for random taps.
    length: Number of taps. Required when coefficients is None.
  """

  coefficients: list[complex] | None = Field(
    None, description="Filter taps; None draws random taps."
  )
  length: int | None = Field(None, description="Number of taps.", ge=0)

  model_config = {"frozen": True}

  @model_validator(mode="after")
  def _check_length(self) -> "MultipathConfig":
    if self.coefficients is None and self.length is None:
      msg = "Either coefficients or length must be given"
      raise ValueError(msg)
    return self


class ChannelConfig(BaseModel):
  """Complete channel configuration.

  Stages without a config stay disabled.

  Attributes:
    noise: AWGN settings.
    carrier_offset: Carrier offset settings.
    multipath: Multipath settings.
    seed: Seed for the channel's Gaussian source.
    max_multipath_taps: Upper bound on the multipath filter length.
  """

  noise: NoiseConfig | None = None
  carrier_offset: CarrierOffsetConfig | None = None
  multipath: MultipathConfig | None = None
  seed: int | None = Field(None, description="Random seed.")
  max_multipath_taps: int = Field(
    MAX_MULTIPATH_TAPS, description="Maximum multipath filter length.", gt=0
  )

  model_config = {"frozen": True}
