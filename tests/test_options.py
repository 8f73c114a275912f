import pathlib

import pytest

import mixtape.options


def test_compile_defaults () -> None:

	"""Defaults match the documented values."""

	options = mixtape.options.CompileOptions()

	assert options.max_recursion_depth == 10
	assert options.rest_symbol == "-"
	assert options.normalize is False
	assert options.verbose is False
	assert options.seed is None


@pytest.mark.parametrize("values", [
	{"max_recursion_depth": -1},
	{"max_recursion_depth": 10000},
	{"max_recursion_depth": 2.5},
	{"rest_symbol": ""},
	{"rest_symbol": "a b"},
	{"rest_symbol": "[x"},
	{"rest_symbol": "*"},
])
def test_compile_validation (values: dict) -> None:

	"""Out-of-range values are rejected."""

	with pytest.raises(ValueError):
		mixtape.options.CompileOptions(**values)


@pytest.mark.parametrize("values", [
	{"length": -1},
	{"min_value": 10, "max_value": 5},
	{"rest_probability": 1.5},
	{"group_probability": -0.1},
])
def test_random_validation (values: dict) -> None:

	"""Out-of-range generator settings are rejected."""

	with pytest.raises(ValueError):
		mixtape.options.RandomSequenceOptions(**values)


def test_from_mapping_rejects_unknown_keys () -> None:

	"""Typos in option names are errors rather than silently ignored."""

	assert mixtape.options.from_mapping(mixtape.options.CompileOptions, {"verbose": True}).verbose is True
	assert mixtape.options.from_mapping(mixtape.options.CompileOptions, None) == mixtape.options.CompileOptions()

	with pytest.raises(ValueError):
		mixtape.options.from_mapping(mixtape.options.CompileOptions, {"verbos": True})


def test_load_config (tmp_path: pathlib.Path) -> None:

	"""Sections of a YAML file become options, with overrides on top."""

	path = tmp_path / "mixtape.yaml"
	path.write_text("compile:\n  max_recursion_depth: 4\n  rest_symbol: '~'\nrandom:\n  length: 8\n")

	config = mixtape.options.load_config(str(path))

	compile_options = mixtape.options.compile_options_from_config(config, verbose=True, rest_symbol=None)
	random_options = mixtape.options.random_options_from_config(config, seed=5)

	assert compile_options == mixtape.options.CompileOptions(max_recursion_depth=4, rest_symbol="~", verbose=True)
	assert random_options == mixtape.options.RandomSequenceOptions(length=8, seed=5)


def test_load_config_missing_file (tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:

	"""A missing file logs a warning and yields no settings."""

	assert mixtape.options.load_config(str(tmp_path / "absent.yaml")) == {}
	assert "not found" in caplog.text


def test_load_config_empty_and_invalid (tmp_path: pathlib.Path) -> None:

	"""An empty file is no settings; a non-mapping file is an error."""

	empty = tmp_path / "empty.yaml"
	empty.write_text("")

	assert mixtape.options.load_config(str(empty)) == {}

	listed = tmp_path / "list.yaml"
	listed.write_text("- 1\n- 2\n")

	with pytest.raises(ValueError):
		mixtape.options.load_config(str(listed))
