"""Typed tokens and the token tree.

``parse()`` lexes a pattern level by level into a tree of typed tokens, with
bracket contents already parsed into ``children``. ``mixtape.compiler``
evaluates that tree. Keeping the two apart means the grammar's precedence
rules can be checked on their own:

- A bracket binds tighter than a trailing ``*``.
- A transform name binds to the bracket written directly after it.
- The first matching rule wins, in this order: transform call, group repeat,
  group, direct repeat, rest, integer.
"""

import dataclasses
import logging
import re
import typing

import mixtape.constants
import mixtape.errors
import mixtape.options
import mixtape.tokenizer
import mixtape.transforms


logger = logging.getLogger(__name__)

RE_INTEGER = re.compile(r"^[+-]?\d+$")


@dataclasses.dataclass(frozen=True)
class Literal:

	"""A bare integer or the rest symbol."""

	text: str


@dataclasses.dataclass(frozen=True)
class DirectRepeat:

	"""``value*count`` outside brackets."""

	value: str
	count: int


@dataclasses.dataclass(frozen=True)
class Group:

	"""``[...]``"""

	inner: str
	children: typing.Tuple["Token", ...] = ()


@dataclasses.dataclass(frozen=True)
class GroupRepeat:

	"""``[...]*count``"""

	inner: str
	count: int
	children: typing.Tuple["Token", ...] = ()


@dataclasses.dataclass(frozen=True)
class TransformCall:

	"""``name[...]``, ``nameP[...]`` or either followed by ``*count``."""

	name: str
	param: typing.Optional[int]
	inner: str
	children: typing.Tuple["Token", ...] = ()
	count: typing.Optional[int] = None


Token = typing.Union[Literal, DirectRepeat, Group, GroupRepeat, TransformCall]

BRACKET_TOKENS = (Group, GroupRepeat, TransformCall)


def _split_brackets (raw: str) -> typing.Tuple[str, str, str]:

	"""Return the text before the first bracket, inside it, and after its matching close."""

	open_index = raw.find("[")

	if open_index < 0:
		raise mixtape.errors.MalformedToken(f"Unmatched ']' in {raw!r}")

	depth = 0

	for index in range(open_index, len(raw)):

		if raw[index] == "[":
			depth += 1

		elif raw[index] == "]":
			depth -= 1

			if depth == 0:
				return raw[:open_index], raw[open_index + 1:index], raw[index + 1:]

	raise mixtape.errors.UnbalancedBrackets(f"Unclosed bracket in {raw!r}")


def _parse_count (text: str, raw: str) -> int:

	"""Read a repeat count, which must be a positive integer."""

	if not text:
		raise mixtape.errors.MalformedToken(f"Repeat operator with no count in {raw!r}")

	if not RE_INTEGER.match(text):
		raise mixtape.errors.MalformedToken(f"Invalid repeat count {text!r} in {raw!r}")

	count = _parse_integer(text, raw)

	if count <= 0:
		raise mixtape.errors.MalformedToken(f"Repeat count must be positive in {raw!r}")

	if count > mixtape.constants.MAX_REPEAT_COUNT:
		raise mixtape.errors.MalformedToken(f"Repeat count exceeds {mixtape.constants.MAX_REPEAT_COUNT} in {raw!r}")

	return count


def _parse_integer (text: str, raw: str) -> int:

	"""Convert digits already matched by ``RE_INTEGER``. Python refuses very long digit strings."""

	try:
		return int(text)

	except ValueError:
		raise mixtape.errors.MalformedToken(f"Integer too long in {raw[:40]!r}...") from None


def classify (raw: str, rest_symbol: str = mixtape.constants.REST_SYMBOL) -> Token:

	"""
	Turn one raw token into a typed token. Bracket tokens come back with no children.

	Raises ``MalformedToken`` (or ``UnknownToken``) when no grammar rule fits,
	and ``UnbalancedBrackets`` when a bracket never closes.
	"""

	if "[" in raw or "]" in raw:

		prefix, inner, suffix = _split_brackets(raw)
		count: typing.Optional[int] = None

		if suffix:

			if not suffix.startswith("*"):
				raise mixtape.errors.MalformedToken(f"Unexpected {suffix!r} after closing bracket in {raw!r}")

			count = _parse_count(suffix[1:], raw)

		if prefix:

			if not mixtape.tokenizer.RE_IDENTIFIER.match(prefix):
				raise mixtape.errors.MalformedToken(f"Invalid transformation name {prefix!r} in {raw!r}")

			name, param = mixtape.transforms.split_transform_name(prefix)

			return TransformCall(name, param, inner, count=count)

		if count is not None:
			return GroupRepeat(inner, count)

		return Group(inner)

	if "*" in raw:

		value, _, count_text = raw.partition("*")

		if not value:
			raise mixtape.errors.MalformedToken(f"Repeat operator with no value in {raw!r}")

		count = _parse_count(count_text, raw)

		if value != rest_symbol:

			if not RE_INTEGER.match(value):
				raise mixtape.errors.MalformedToken(f"Invalid value for repetition: {value!r}")

			_parse_integer(value, raw)

		return DirectRepeat(value, count)

	if raw == rest_symbol:
		return Literal(raw)

	if RE_INTEGER.match(raw):
		_parse_integer(raw, raw)
		return Literal(raw)

	raise mixtape.errors.UnknownToken(f"Unknown token: {raw!r}")


def parse (text: str, options: typing.Optional[mixtape.options.CompileOptions] = None, depth: int = 0) -> typing.List[Token]:

	"""
	Parse pattern text into a token tree.

	``depth`` is the nesting level of ``text`` itself (0 for a whole pattern).
	Every bracket token descends with ``depth + 1``. A bracket token whose
	contents would sit deeper than ``options.max_recursion_depth`` is dropped
	with a ``RecursionLimitExceeded`` diagnostic. A token that fails to
	classify is dropped with its own diagnostic. Either way the rest of the
	text still parses.
	"""

	if options is None:
		options = mixtape.options.CompileOptions()

	tokens: typing.List[Token] = []

	for raw in mixtape.tokenizer.tokenize(text, verbose=options.verbose):

		try:
			token = classify(raw, options.rest_symbol)

		except mixtape.errors.PatternError as error:
			mixtape.errors.report(logger, error, options.verbose)
			continue

		if isinstance(token, BRACKET_TOKENS):

			if depth + 1 > options.max_recursion_depth:
				mixtape.errors.report(
					logger,
					mixtape.errors.RecursionLimitExceeded(f"Maximum recursion depth ({options.max_recursion_depth}) exceeded, skipping {raw!r}"),
					options.verbose
				)
				continue

			token = dataclasses.replace(token, children=tuple(parse(token.inner, options, depth + 1)))

		tokens.append(token)

	return tokens
