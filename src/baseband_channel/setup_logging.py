"""Logging configuration for the baseband_channel package."""

import coloredlogs


def setup_logging(level: str = "INFO") -> None:
  """Install a colored root handler with a short timestamped format.

  Library modules only create loggers; entry points call this once.

  Args:
    level: Logging level (e.g., "INFO", "DEBUG", "WARNING").
  """
  coloredlogs.install(
    level=level,
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
    field_styles={"name": {"color": "blue"}, "levelname": {"bold": True}},
  )
