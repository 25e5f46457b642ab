# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Runtime support for generated fragment code."""

from .globals import INSTALLERS, RuntimeContext, bind_libraries
from .helpers import HELPERS

__all__ = ["HELPERS", "INSTALLERS", "RuntimeContext", "bind_libraries"]
