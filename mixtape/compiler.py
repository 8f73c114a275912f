import collections.abc
import logging
import random
import typing

import mixtape.constants
import mixtape.errors
import mixtape.grammar
import mixtape.options
import mixtape.sequence_utils
import mixtape.steps
import mixtape.transforms


logger = logging.getLogger(__name__)

OptionsArgument = typing.Optional[typing.Union[mixtape.options.CompileOptions, typing.Mapping[str, typing.Any]]]


def _resolve_options (options: OptionsArgument) -> mixtape.options.CompileOptions:

	"""Accept options as an object, a mapping of its fields, or None."""

	if options is None:
		return mixtape.options.CompileOptions()

	if isinstance(options, mixtape.options.CompileOptions):
		return options

	if isinstance(options, collections.abc.Mapping):
		return mixtape.options.from_mapping(mixtape.options.CompileOptions, options)

	raise TypeError(f"Options must be CompileOptions or a mapping, got {type(options).__name__}")


def compile (pattern: str, options: OptionsArgument = None, rng: typing.Optional[random.Random] = None) -> mixtape.steps.Sequence:

	"""
	Compile a pattern string into a flat sequence of steps.

	This never raises. Invalid input gives an empty sequence. Each bad token,
	sub-pattern, or transform call contributes nothing (or passes its input
	through), and the rest of the pattern still compiles. Diagnostics go to
	the ``mixtape`` loggers; see ``mixtape.errors.report()``.

	**Syntax:**
	- `1 2 3`: integers are notes, separated by spaces.
	- `-`: a rest (configurable with ``rest_symbol``).
	- `[1 2]`: a group, spliced in place.
	- `[1 2]*3`: a group repeated three times.
	- `5*4` / `-*4`: a value or rest repeated four times.
	- `scale2[1 2 3]`: a transform applied to the compiled group (see ``mixtape.transforms``).

	Parameters:
		pattern: The pattern text.
		options: ``CompileOptions`` or a mapping of its fields.
		rng: Random source for ``scramble`` and ``sparse``. Defaults to
			``random.Random(options.seed)``.

	Example:
		```python
		mixtape.compiler.compile("1 [2 -]*2 invert5[1 9]")
		# [Note(1), Note(2), REST, Note(2), REST, Note(9), Note(1)]
		```
	"""

	try:
		options = _resolve_options(options)

	except (TypeError, ValueError) as error:
		verbose = isinstance(options, collections.abc.Mapping) and options.get("verbose") is True
		mixtape.errors.report(logger, mixtape.errors.InvalidInput(f"Invalid options: {error}"), verbose)
		return []

	if not isinstance(pattern, str) or not pattern:
		mixtape.errors.report(logger, mixtape.errors.InvalidInput(f"Invalid pattern input: {pattern!r}"), options.verbose)
		return []

	if rng is None:
		rng = random.Random(options.seed)

	logger.debug(f"Parsing pattern: {pattern}")

	try:
		tokens = mixtape.grammar.parse(pattern, options)
		sequence = evaluate(tokens, options, rng)

		if options.normalize:
			sequence = mixtape.sequence_utils.normalize(sequence, options.rest_symbol)

	except Exception:
		logger.exception(f"Compiling {pattern[:40]!r} failed, returning an empty sequence")
		return []

	return sequence


def _literal_step (text: str, rest_symbol: str) -> mixtape.steps.Step:

	"""Convert an already-classified literal into a step."""

	if text == rest_symbol:
		return mixtape.steps.REST

	return mixtape.steps.Note(int(text))


def evaluate (tokens: typing.Sequence[mixtape.grammar.Token], options: mixtape.options.CompileOptions, rng: random.Random) -> mixtape.steps.Sequence:

	"""
	Flatten a token tree into steps.

	Repeated groups and transform calls are evaluated once and their result
	concatenated ``count`` times. A randomised transform is therefore drawn
	once per token, not once per repetition. A token that would take the
	sequence past ``MAX_SEQUENCE_LENGTH`` steps is dropped with an
	``OutputLimitExceeded`` diagnostic.
	"""

	sequence: mixtape.steps.Sequence = []

	for token in tokens:

		count = 1

		if isinstance(token, mixtape.grammar.TransformCall):
			inner = evaluate(token.children, options, rng)
			piece = mixtape.transforms.apply(token.name, token.param, inner, rng=rng, verbose=options.verbose)
			count = 1 if token.count is None else token.count

		elif isinstance(token, mixtape.grammar.GroupRepeat):
			piece = evaluate(token.children, options, rng)
			count = token.count

		elif isinstance(token, mixtape.grammar.Group):
			piece = evaluate(token.children, options, rng)

		elif isinstance(token, mixtape.grammar.DirectRepeat):
			piece = [_literal_step(token.value, options.rest_symbol)]
			count = token.count

		else:
			piece = [_literal_step(token.text, options.rest_symbol)]

		if len(sequence) + len(piece) * count > mixtape.constants.MAX_SEQUENCE_LENGTH:
			mixtape.errors.report(
				logger,
				mixtape.errors.OutputLimitExceeded(f"Sequence would exceed {mixtape.constants.MAX_SEQUENCE_LENGTH} steps, skipping {type(token).__name__}"),
				options.verbose
			)
			continue

		sequence.extend(piece * count)

	return sequence
