from __future__ import annotations

import pytest

from fragc.core.errors import EmitError
from fragc.host import VirtualFileSystem
from fragc.options import ROOT_FILE_NAME


def test_for_fragment_serves_root_and_declarations() -> None:
	vfs = VirtualFileSystem.for_fragment("x => x", {"/lib/lib.es5.d.ts": "declare const NaN: number"})
	assert set(vfs.paths) == {ROOT_FILE_NAME, "/lib/lib.es5.d.ts"}
	assert vfs.file_exists(ROOT_FILE_NAME)
	assert vfs.read_file(ROOT_FILE_NAME) == "x => x"


def test_unknown_paths_are_sandbox_violations() -> None:
	vfs = VirtualFileSystem({ROOT_FILE_NAME: ""})
	with pytest.raises(EmitError, match="unknown path"):
		vfs.file_exists("/etc/passwd")
	with pytest.raises(EmitError, match="unknown path"):
		vfs.read_file("/lib/lib.dom.d.ts")


def test_writes_are_refused() -> None:
	vfs = VirtualFileSystem({ROOT_FILE_NAME: ""})
	with pytest.raises(EmitError, match="attempted to write"):
		vfs.write_file("/fragment.py", "pass")


def test_source_mapping_is_copied() -> None:
	files = {ROOT_FILE_NAME: "a"}
	vfs = VirtualFileSystem(files)
	files[ROOT_FILE_NAME] = "b"
	assert vfs.read_file(ROOT_FILE_NAME) == "a"
