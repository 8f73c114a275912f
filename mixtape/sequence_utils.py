import collections.abc
import math
import numbers
import random
import re
import typing

import mixtape.constants
import mixtape.options
import mixtape.steps

T = typing.TypeVar("T")

RE_INTEGER = re.compile(r"^[+-]?\d+$")


def stringify (sequence: typing.Iterable[typing.Any], rest_symbol: str = mixtape.constants.REST_SYMBOL) -> str:

	"""Render steps as a flat pattern string.

	Grouping and transforms are not recoverable, so this is a lossy
	projection. A bracket-free pattern compiles back to the same sequence.

	Example:
		```python
		mixtape.sequence_utils.stringify(mixtape.steps.notes(1, None, 3))  # "1 - 3"
		```
	"""

	return " ".join(
		rest_symbol if isinstance(step, mixtape.steps.Rest) else str(step.value)
		for step in normalize(sequence, rest_symbol)
	)


def _coerce_step (value: typing.Any, rest_symbol: str) -> mixtape.steps.Step:

	"""Convert one loose value into a step."""

	if isinstance(value, (mixtape.steps.Note, mixtape.steps.Rest)):
		return value

	if value is None or isinstance(value, bool):
		return mixtape.steps.REST

	if isinstance(value, numbers.Integral):
		return mixtape.steps.Note(int(value))

	if isinstance(value, numbers.Real):

		if not math.isfinite(value):
			return mixtape.steps.REST

		return mixtape.steps.Note(int(value))

	if isinstance(value, str):

		text = value.strip()

		if text != rest_symbol and RE_INTEGER.match(text):

			try:
				return mixtape.steps.Note(int(text))

			except ValueError:
				# Longer than Python's integer string conversion limit
				return mixtape.steps.REST

	return mixtape.steps.REST


def normalize (values: typing.Iterable[typing.Any], rest_symbol: str = mixtape.constants.REST_SYMBOL) -> mixtape.steps.Sequence:

	"""
	Coerce loose values into steps.

	Integers, finite floats (truncated towards zero) and integer-looking
	strings become notes. The rest symbol, ``None`` and anything
	unrecognised become rests. Steps pass through unchanged, so normalizing
	twice gives the same result.
	"""

	return [_coerce_step(value, rest_symbol) for value in values]


def weighted_choice (options: typing.List[typing.Tuple[T, float]], rng: random.Random) -> T:

	"""Pick one item from a list of (value, weight) pairs.

	Weights are relative - they don't need to sum to 1.0. Higher weight means
	higher probability of selection.

	Parameters:
		options: List of `(value, weight)` tuples
		rng: Random number generator instance

	Example:
		```python
		style = mixtape.sequence_utils.weighted_choice([
			("house", 0.5),
			("dnb", 0.3),
			("glitch", 0.2),
		], rng)
		```
	"""

	if not options:
		raise ValueError("Options list cannot be empty")

	values, weights = zip(*options)
	total = sum(weights)

	if total <= 0:
		raise ValueError("Total weight must be positive")

	threshold = rng.random() * total
	cumulative = 0.0

	for value, weight in options:
		cumulative += weight
		if cumulative >= threshold:
			return value

	return options[-1][0]


def random_sequence (
	options: typing.Optional[typing.Union[mixtape.options.RandomSequenceOptions, typing.Mapping[str, typing.Any]]] = None,
	rng: typing.Optional[random.Random] = None
) -> mixtape.steps.Sequence:

	"""Generate a random sequence of rests, notes and short runs.

	Each slot is a rest, a group, or a note, chosen by ``rest_probability`` and
	``group_probability``:

	- A group is 2-4 random steps. It is only used while more than three
	  slots remain, and is itself repeated 2-4 times with
	  ``repetition_probability``. A repeated group only counts once towards
	  ``length``, so grouped output can be longer than ``length``.
	- A note is repeated 2-4 times with ``repetition_probability``, cut short
	  at ``length``. Without groups the result is exactly ``length`` steps.

	Every note lies in ``[min_value, max_value]``.

	Parameters:
		options: ``RandomSequenceOptions`` or a mapping of its fields
		rng: Random number generator instance (default: ``random.Random(options.seed)``)

	Example:
		```python
		steps = mixtape.sequence_utils.random_sequence({"length": 8, "group_probability": 0.0}, random.Random(1))
		len(steps)  # 8
		```
	"""

	if options is None:
		options = mixtape.options.RandomSequenceOptions()

	elif isinstance(options, collections.abc.Mapping):
		options = mixtape.options.from_mapping(mixtape.options.RandomSequenceOptions, options)

	if rng is None:
		rng = random.Random(options.seed)

	def random_note () -> mixtape.steps.Note:
		return mixtape.steps.Note(rng.randint(options.min_value, options.max_value))

	def random_step () -> mixtape.steps.Step:
		if rng.random() < options.rest_probability:
			return mixtape.steps.REST
		return random_note()

	result: mixtape.steps.Sequence = []
	index = 0

	while index < options.length:

		roll = rng.random()

		if roll < options.rest_probability:
			result.append(mixtape.steps.REST)
			index += 1

		elif roll < options.rest_probability + options.group_probability:

			if options.length - index > 3:
				group_length = rng.randint(mixtape.constants.RUN_MIN, mixtape.constants.RUN_MAX)
				group = [random_step() for _ in range(group_length)]

				repeats = 1
				if rng.random() < options.repetition_probability:
					repeats = rng.randint(mixtape.constants.RUN_MIN, mixtape.constants.RUN_MAX)

				result.extend(group * repeats)
				index += group_length

			else:
				# Too close to the end for a group.
				result.append(random_note())
				index += 1

		else:
			note = random_note()

			repeats = 1
			if rng.random() < options.repetition_probability:
				repeats = min(rng.randint(mixtape.constants.RUN_MIN, mixtape.constants.RUN_MAX), options.length - index)

			result.extend([note] * repeats)
			index += repeats

	return result
