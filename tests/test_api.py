import random

import mixtape

from mixtape.steps import notes


def test_package_exports () -> None:

	"""The package exposes the compile, transform and utility entry points."""

	assert mixtape.compile("invert5[1 9]") == [mixtape.Note(9), mixtape.Note(1)]
	assert mixtape.apply("reverse", None, notes(1, 2)) == notes(2, 1)
	assert mixtape.stringify(mixtape.compile("- 1 -*3")) == "- 1 - - -"
	assert mixtape.normalize(["4", None]) == [mixtape.Note(4), mixtape.REST]
	assert len(mixtape.random_sequence(mixtape.RandomSequenceOptions(group_probability=0.0), random.Random(0))) == 16


def test_steps_are_immutable_values () -> None:

	"""Steps compare by value and rests are interchangeable."""

	assert mixtape.Note(3) == mixtape.Note(3)
	assert mixtape.Rest() == mixtape.REST
	assert mixtape.steps.is_note(mixtape.Note(3))
	assert not mixtape.steps.is_note(mixtape.REST)
	assert {mixtape.Note(1), mixtape.Note(1), mixtape.REST} == {mixtape.Note(1), mixtape.REST}


def test_compile_with_options_object () -> None:

	"""Options may be passed as an object."""

	options = mixtape.CompileOptions(rest_symbol="r", max_recursion_depth=3)

	assert mixtape.stringify(mixtape.compile("1 r*2 [2]", options), rest_symbol="r") == "1 r r 2"
