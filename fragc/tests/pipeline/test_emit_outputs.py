import pytest

from fragc.core.errors import EmitError
from fragc.options import OUTPUT_FILE_NAME
from fragc.pipeline import _emit
from fragc.program import EmitResult


class FixedOutputProgram:
	"""Writes a fixed list of outputs when asked to emit."""

	def __init__(self, outputs, *, skipped: bool = False) -> None:
		self.outputs = outputs
		self.skipped = skipped

	def emit(self, write_file) -> EmitResult:
		for path, text in self.outputs:
			write_file(path, text)
		return EmitResult(emit_skipped=self.skipped, emitted_files=[path for path, _ in self.outputs])


def test_single_output_is_returned() -> None:
	program = FixedOutputProgram([(OUTPUT_FILE_NAME, "__completion__ = 1\n")])
	assert _emit(program) == "__completion__ = 1\n"


def test_no_output() -> None:
	with pytest.raises(EmitError, match="exactly one output, got 0"):
		_emit(FixedOutputProgram([]))


def test_two_outputs() -> None:
	program = FixedOutputProgram([(OUTPUT_FILE_NAME, "a = 1\n"), ("/other.py", "b = 2\n")])
	with pytest.raises(EmitError, match="exactly one output, got 2"):
		_emit(program)


def test_wrong_output_path() -> None:
	with pytest.raises(EmitError, match="unexpected output path '/other.py'"):
		_emit(FixedOutputProgram([("/other.py", "a = 1\n")]))


def test_skipped_emit() -> None:
	with pytest.raises(EmitError, match="skipped"):
		_emit(FixedOutputProgram([], skipped=True))
