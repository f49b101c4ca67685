"""Tests for the logging setup."""

import logging

from baseband_channel.setup_logging import setup_logging


def test_setup_logging_installs_root_handler() -> None:
  """Test that a handler at the requested level is added to the root logger."""
  root = logging.getLogger()
  handlers, level = list(root.handlers), root.level
  try:
    setup_logging(level="DEBUG")
    new_handlers = [h for h in root.handlers if h not in handlers]
    assert len(new_handlers) == 1
    assert new_handlers[0].level == logging.DEBUG
    assert root.getEffectiveLevel() <= logging.DEBUG
  finally:
    root.handlers = handlers
    root.setLevel(level)
