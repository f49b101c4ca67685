"""Tests for the configuration module."""

import pytest
from pydantic import ValidationError

from baseband_channel.config import (
  MAX_MULTIPATH_TAPS,
  CarrierOffsetConfig,
  ChannelConfig,
  MultipathConfig,
  NoiseConfig,
)


def test_channel_config_defaults() -> None:
  """Test that default values are set correctly."""
  config = ChannelConfig()
  assert config.noise is None
  assert config.carrier_offset is None
  assert config.multipath is None
  assert config.seed is None
  assert config.max_multipath_taps == MAX_MULTIPATH_TAPS


def test_noise_config_defaults() -> None:
  """Test that the noise floor has a default and SNR does not."""
  config = NoiseConfig(snr_db=12.0)
  expected_floor = -60.0
  assert config.noise_floor_db == expected_floor

  with pytest.raises(ValidationError):
    NoiseConfig()  # type: ignore[call-arg]


def test_carrier_offset_config_defaults() -> None:
  """Test that the phase offset defaults to zero."""
  config = CarrierOffsetConfig(frequency=0.25)
  assert config.phase == 0.0


def test_multipath_config_requires_taps_or_length() -> None:
  """Test that an empty multipath config is rejected."""
  with pytest.raises(ValidationError):
    MultipathConfig()


def test_multipath_config_accepts_complex_taps() -> None:
  """Test that complex coefficients are kept as given."""
  config = MultipathConfig(coefficients=[1 + 0j, 0.1 - 0.2j])
  assert config.coefficients == [1 + 0j, 0.1 - 0.2j]
  assert config.length is None


def test_multipath_config_validation() -> None:
  """Test that a negative tap count is rejected."""
  with pytest.raises(ValidationError):
    MultipathConfig(length=-1)


def test_max_taps_validation() -> None:
  """Test that a non-positive tap limit is rejected."""
  with pytest.raises(ValidationError):
    ChannelConfig(max_multipath_taps=0)


def test_config_is_frozen() -> None:
  """Test that configs cannot be mutated after creation."""
  config = ChannelConfig(seed=3)
  with pytest.raises(ValidationError):
    config.seed = 4  # type: ignore[misc]
