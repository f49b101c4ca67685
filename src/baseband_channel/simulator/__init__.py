"""Simulator module for baseband propagation channels."""

from baseband_channel.simulator import presets
from baseband_channel.simulator.channel import Channel
from baseband_channel.simulator.fir_filter import FIRFilter
from baseband_channel.simulator.oscillator import Oscillator
from baseband_channel.simulator.presets import (
  PRESETS,
  ChannelPreset,
  awgn,
  ideal,
  impaired,
  multipath,
  offset,
)
from baseband_channel.simulator.random_source import GaussianSource
from baseband_channel.simulator.stages import (
  CarrierOffsetStage,
  ChannelImpairment,
  ConfigurationError,
  ImpairmentStage,
  MultipathStage,
  NoiseStage,
)

__all__ = [
  # Channel and stages
  "CarrierOffsetStage",
  "Channel",
  "ChannelImpairment",
  "ConfigurationError",
  "ImpairmentStage",
  "MultipathStage",
  "NoiseStage",
  # Collaborators
  "FIRFilter",
  "GaussianSource",
  "Oscillator",
  # Channel presets
  "PRESETS",
  "ChannelPreset",
  "awgn",
  "ideal",
  "impaired",
  "multipath",
  "offset",
  "presets",
]
