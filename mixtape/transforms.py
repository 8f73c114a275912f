"""Named sequence transforms.

Each transform is a function ``(sequence, param, rng) -> sequence`` that returns
a new list and leaves its input untouched. Rests pass through the
value-changing transforms unchanged.

| name | param | effect |
|---|---|---|
| scramble | - | random permutation |
| invert | required | note -> 2P - note |
| scale | required | note -> note * P |
| offset | required | note -> note + P |
| mirror | - | palindrome without repeating the last step |
| repeat | required | every step P times in a row |
| quantize | required | note -> nearest multiple of P (halves round up) |
| reverse | - | reverse order |
| rotate | optional (1) | rotate left by P steps |
| sparse | optional (50) | each note becomes a rest with P% probability |
| interleave | - | a rest after every step |

In a pattern the parameter is fused onto the name, so ``scale2[1 2 3]`` is
``apply("scale", 2, [1, 2, 3])``.
"""

import dataclasses
import logging
import random
import re
import typing

import mixtape.constants
import mixtape.errors
import mixtape.steps


logger = logging.getLogger(__name__)

PARAM_NONE = "none"
PARAM_REQUIRED = "required"
PARAM_OPTIONAL = "optional"

RE_TRANSFORM_NAME = re.compile(r"^([A-Za-z]+)(\d*)$")
RE_LETTERS = re.compile(r"^[A-Za-z]+$")

TransformFunction = typing.Callable[[mixtape.steps.Sequence, typing.Optional[int], random.Random], mixtape.steps.Sequence]


@dataclasses.dataclass(frozen=True)
class TransformDefinition:

	"""
	A registry entry: the function plus how it takes its parameter.
	"""

	name: str
	function: TransformFunction
	param: str = PARAM_NONE
	default: typing.Optional[int] = None


def split_transform_name (identifier: str) -> typing.Tuple[str, typing.Optional[int]]:

	"""Split a fused transform identifier into its name and optional parameter.

	``"scale2"`` gives ``("scale", 2)`` and ``"reverse"`` gives ``("reverse", None)``.
	Raises ``UnknownTransform`` if the identifier is not letters followed by digits.
	"""

	if not isinstance(identifier, str):
		raise mixtape.errors.UnknownTransform(f"Transformation name must be a string, got {type(identifier).__name__}")

	match = RE_TRANSFORM_NAME.match(identifier)

	if match is None:
		raise mixtape.errors.UnknownTransform(f"Invalid transformation name: {identifier!r}")

	name, digits = match.groups()

	if not digits:
		return name, None

	try:
		return name, int(digits)

	except ValueError:
		raise mixtape.errors.UnknownTransform(f"Parameter too long in transformation {name!r}") from None


def _map_notes (sequence: mixtape.steps.Sequence, function: typing.Callable[[int], int]) -> mixtape.steps.Sequence:

	"""Apply a value function to every note, leaving rests in place."""

	return [mixtape.steps.Note(function(step.value)) if isinstance(step, mixtape.steps.Note) else step for step in sequence]


def scramble (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Shuffle the steps into a uniformly random order."""

	result = list(sequence)
	rng.shuffle(result)

	return result


def invert (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Reflect every note around the pivot ``param``."""

	return _map_notes(sequence, lambda value: 2 * param - value)


def scale (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Multiply every note by ``param``."""

	return _map_notes(sequence, lambda value: value * param)


def offset (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Add ``param`` to every note."""

	return _map_notes(sequence, lambda value: value + param)


def mirror (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""
	Append the sequence backwards, without repeating the pivot.

	``[1, 2, 3]`` becomes ``[1, 2, 3, 2, 1]``, so a sequence of n steps grows to 2n - 1.
	"""

	if len(sequence) <= 1:
		return list(sequence)

	return list(sequence) + list(reversed(sequence[:-1]))


def repeat (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Replace every step with ``param`` consecutive copies of itself."""

	if param > mixtape.constants.MAX_REPEAT_COUNT or len(sequence) * param > mixtape.constants.MAX_SEQUENCE_LENGTH:
		raise mixtape.errors.InvalidParameter(f"repeat is limited to {mixtape.constants.MAX_REPEAT_COUNT} copies and {mixtape.constants.MAX_SEQUENCE_LENGTH} steps")

	return [step for step in sequence for _ in range(param)]


def quantize (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""
	Snap every note to the nearest multiple of ``param``.

	Halfway values round up (towards positive infinity), so with a grid of 4,
	2 becomes 4 and -2 becomes 0.
	"""

	if param == 0:
		raise mixtape.errors.InvalidParameter("quantize grid cannot be zero")

	grid = abs(param)

	# Integer form of floor(value / grid + 0.5) * grid
	return _map_notes(sequence, lambda value: ((2 * value + grid) // (2 * grid)) * grid)


def reverse (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Flip the sequence backwards."""

	return list(reversed(sequence))


def rotate (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Rotate left by ``param`` steps, wrapping around. Negative values rotate right."""

	length = len(sequence)

	if length <= 1:
		return list(sequence)

	shift = param % length

	return list(sequence[shift:]) + list(sequence[:shift])


def sparse (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Turn each note into a rest with ``param`` percent probability."""

	probability = param / 100.0

	return [
		mixtape.steps.REST if isinstance(step, mixtape.steps.Note) and rng.random() < probability else step
		for step in sequence
	]


def interleave (sequence: mixtape.steps.Sequence, param: typing.Optional[int], rng: random.Random) -> mixtape.steps.Sequence:

	"""Follow every step with a rest, doubling the length."""

	return [item for step in sequence for item in (step, mixtape.steps.REST)]


TRANSFORMS: typing.Dict[str, TransformDefinition] = {
	"scramble": TransformDefinition("scramble", scramble),
	"invert": TransformDefinition("invert", invert, PARAM_REQUIRED),
	"scale": TransformDefinition("scale", scale, PARAM_REQUIRED),
	"offset": TransformDefinition("offset", offset, PARAM_REQUIRED),
	"mirror": TransformDefinition("mirror", mirror),
	"repeat": TransformDefinition("repeat", repeat, PARAM_REQUIRED),
	"quantize": TransformDefinition("quantize", quantize, PARAM_REQUIRED),
	"reverse": TransformDefinition("reverse", reverse),
	"rotate": TransformDefinition("rotate", rotate, PARAM_OPTIONAL, mixtape.constants.ROTATE_DEFAULT_STEPS),
	"sparse": TransformDefinition("sparse", sparse, PARAM_OPTIONAL, mixtape.constants.SPARSE_DEFAULT_PERCENT),
	"interleave": TransformDefinition("interleave", interleave),
}


def register_transform (name: str, function: TransformFunction, param: str = PARAM_NONE, default: typing.Optional[int] = None) -> None:

	"""Add (or replace) a named transform so patterns can call it.

	Parameters:
		name: Letters only, since trailing digits in a pattern are the parameter.
		function: Called as ``function(sequence, param, rng)``; must return a new list.
		param: ``PARAM_NONE``, ``PARAM_REQUIRED`` or ``PARAM_OPTIONAL``.
		default: The parameter used when an optional one is omitted.

	Example:
		```python
		def octave (sequence, param, rng):
			return sequence + mixtape.transforms.offset(sequence, 12, rng)

		mixtape.transforms.register_transform("octave", octave)
		mixtape.compile("octave[1 5]")  # 1 5 13 17
		```
	"""

	if not RE_LETTERS.match(name):
		raise ValueError(f"Transform names must be letters only: {name!r}")

	if param not in (PARAM_NONE, PARAM_REQUIRED, PARAM_OPTIONAL):
		raise ValueError(f"Unknown parameter mode: {param!r}")

	TRANSFORMS[name] = TransformDefinition(name, function, param, default)


def apply (
	name: str,
	param: typing.Optional[int],
	sequence: mixtape.steps.Sequence,
	rng: typing.Optional[random.Random] = None,
	verbose: bool = True
) -> mixtape.steps.Sequence:

	"""
	Apply a named transform to a sequence.

	Never raises for a bad call. An unknown name, a missing required
	parameter, or an out-of-domain parameter returns a copy of the input
	and reports a diagnostic. A fused name such as ``"scale2"`` is accepted
	when ``param`` is None.

	Parameters:
		name: A registry name, optionally with a fused parameter.
		param: The numeric parameter, or None.
		sequence: Steps to transform. The list is not modified.
		rng: Random source for ``scramble`` and ``sparse`` (default: a fresh ``random.Random()``).
		verbose: Log diagnostics at WARNING rather than DEBUG.

	Example:
		```python
		mixtape.transforms.apply("invert", 5, mixtape.steps.notes(1, 9))  # [Note(9), Note(1)]
		```
	"""

	try:
		base_name, fused_param = split_transform_name(name)

	except mixtape.errors.UnknownTransform as error:
		mixtape.errors.report(logger, error, verbose)
		return list(sequence)

	definition = TRANSFORMS.get(base_name)

	if definition is None:
		mixtape.errors.report(logger, mixtape.errors.UnknownTransform(f"Unknown transformation: {base_name}"), verbose)
		return list(sequence)

	if param is None:
		param = fused_param

	if param is None:

		if definition.param == PARAM_REQUIRED:
			mixtape.errors.report(logger, mixtape.errors.MissingRequiredParameter(f"{base_name} transformation requires a numeric parameter"), verbose)
			return list(sequence)

		param = definition.default

	if rng is None:
		rng = random.Random()

	try:
		return list(definition.function(list(sequence), param, rng))

	except mixtape.errors.PatternError as error:
		mixtape.errors.report(logger, error, verbose)

	except Exception:
		logger.exception(f"Transformation {base_name} failed, passing its input through")

	return list(sequence)
