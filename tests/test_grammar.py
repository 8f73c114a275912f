import sys

import pytest

import mixtape.errors
import mixtape.grammar
import mixtape.options


def test_classify_literals () -> None:

	"""Integers (signed or not) and the rest symbol are literals."""

	assert mixtape.grammar.classify("12") == mixtape.grammar.Literal("12")
	assert mixtape.grammar.classify("-3") == mixtape.grammar.Literal("-3")
	assert mixtape.grammar.classify("-") == mixtape.grammar.Literal("-")
	assert mixtape.grammar.classify("~", rest_symbol="~") == mixtape.grammar.Literal("~")


def test_classify_direct_repeat () -> None:

	"""``value*count`` becomes a direct repeat."""

	assert mixtape.grammar.classify("5*4") == mixtape.grammar.DirectRepeat("5", 4)
	assert mixtape.grammar.classify("-*2") == mixtape.grammar.DirectRepeat("-", 2)


def test_classify_group () -> None:

	"""A plain bracket is a group, with its inner text kept verbatim."""

	assert mixtape.grammar.classify("[1 [2 3]]") == mixtape.grammar.Group("1 [2 3]")


def test_classify_group_repeat_before_group () -> None:

	"""A group followed by a count is a group repeat, not a group."""

	assert mixtape.grammar.classify("[1 2]*3") == mixtape.grammar.GroupRepeat("1 2", 3)


def test_classify_transform_call () -> None:

	"""An identifier before a bracket is a transform call with its fused parameter split off."""

	assert mixtape.grammar.classify("scale2[1 2]") == mixtape.grammar.TransformCall("scale", 2, "1 2")
	assert mixtape.grammar.classify("reverse[1 2]") == mixtape.grammar.TransformCall("reverse", None, "1 2")
	assert mixtape.grammar.classify("rotate12[1]*2") == mixtape.grammar.TransformCall("rotate", 12, "1", count=2)


@pytest.mark.parametrize("raw", ["[1 2]*", "*3", "3*", "3*x", "3*0", "3*-2", "x*3", "[1]*2x", "[1]x", "1[2]", "[1]]", "3*4097", "[1]*4097"])
def test_classify_malformed (raw: str) -> None:

	"""Tokens that fit no rule raise ``MalformedToken``."""

	with pytest.raises(mixtape.errors.MalformedToken):
		mixtape.grammar.classify(raw)


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no integer string conversion limit")
@pytest.mark.parametrize("raw", ["9" * 5000, "-" + "9" * 5000, "9" * 5000 + "*2", "[1]*" + "9" * 5000])
def test_classify_overlong_integers (raw: str) -> None:

	"""Integers too long to convert are malformed rather than a conversion error."""

	with pytest.raises(mixtape.errors.MalformedToken):
		mixtape.grammar.classify(raw)


def test_classify_unknown () -> None:

	"""Plain words are unknown tokens."""

	with pytest.raises(mixtape.errors.UnknownToken):
		mixtape.grammar.classify("hello")


def test_classify_unbalanced () -> None:

	"""A bracket that never closes raises ``UnbalancedBrackets``."""

	with pytest.raises(mixtape.errors.UnbalancedBrackets):
		mixtape.grammar.classify("[1 [2]")


def test_parse_builds_tree () -> None:

	"""Bracket contents are parsed into children."""

	tokens = mixtape.grammar.parse("1 scale2[3 [4 5]*2]")

	assert tokens[0] == mixtape.grammar.Literal("1")

	transform = tokens[1]

	assert isinstance(transform, mixtape.grammar.TransformCall)
	assert transform.name == "scale"
	assert transform.param == 2
	assert transform.children == (
		mixtape.grammar.Literal("3"),
		mixtape.grammar.GroupRepeat("4 5", 2, (mixtape.grammar.Literal("4"), mixtape.grammar.Literal("5"))),
	)


def test_parse_drops_bad_tokens (diagnostics) -> None:

	"""A bad token is dropped and reported, and parsing continues."""

	tokens = mixtape.grammar.parse("1 *3 hello 2")

	assert tokens == [mixtape.grammar.Literal("1"), mixtape.grammar.Literal("2")]
	assert [type(error) for error in diagnostics()] == [mixtape.errors.MalformedToken, mixtape.errors.UnknownToken]


def test_parse_depth_guard (diagnostics) -> None:

	"""A bracket whose contents would exceed the depth limit is dropped."""

	options = mixtape.options.CompileOptions(max_recursion_depth=1)

	tokens = mixtape.grammar.parse("[1 [2]] 3", options)

	assert tokens == [
		mixtape.grammar.Group("1 [2]", (mixtape.grammar.Literal("1"),)),
		mixtape.grammar.Literal("3"),
	]
	assert [type(error) for error in diagnostics()] == [mixtape.errors.RecursionLimitExceeded]


def test_parse_zero_depth_allows_no_brackets () -> None:

	"""With a depth limit of zero only bare values survive."""

	options = mixtape.options.CompileOptions(max_recursion_depth=0)

	assert mixtape.grammar.parse("1 [2] 3", options) == [mixtape.grammar.Literal("1"), mixtape.grammar.Literal("3")]
