# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Bundled declaration files (`lib.<name>.d.ts`), read as package data."""
