# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Root logger configuration for the command-line driver."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_configured = False


def setup_logging(level: str = "WARNING") -> None:
	"""Configure the root logger once; later calls only adjust the level."""
	global _configured
	numeric = getattr(logging, level.upper(), None)
	if not isinstance(numeric, int):
		raise ValueError(f"unknown log level {level!r}")
	if _configured:
		logging.getLogger().setLevel(numeric)
		return
	_configured = True
	logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATEFMT, stream=sys.stderr)


__all__ = ["setup_logging", "LOG_FORMAT"]
