# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared compiler core: spans, diagnostics, pipeline errors."""
