import random
import typing

import mixtape.constants
import mixtape.options
import mixtape.sequence_utils


STYLE_PATTERNS: typing.Dict[str, typing.List[str]] = {
	"dnb": [
		"[1 - - - - - 1 -]*2",
		"[- - 1 - - 1 - -]*2",
		"[1 - - 1 - 1 - -]*2",
		"1 - - - - - 1 - - - - - 1 - - -",		# two-step kick
		"- - - - 1 - - - - - - - 1 - - -",		# snare on 5 and 13
		"[1 -]*8",
	],
	"house": [
		"[1 - - -]*4",							# four on the floor
		"[1 - - - 1 - - -]*2",
		"[- 1 - 1]*4",							# offbeat hats
		"[- 1]*8",
		"[- - 1 - - - 1 -]*2",					# clap on 2 and 4
	],
	"minimal": [
		"[1 - - - - - - -]*2",
		"1 - - - - - - - 2 - - - - - - -",
		"[- - 1 - - - - -]*4",
		"1 - - - 1 - - - - - 1 - - - - -",
	],
	"glitch": [
		"1 - 3 - - 2 - - 1 - - - 5 - 2 -",
		"scramble[1 2 3 4 5 6 7 8]",
		"1 - - 1 - 1 - - - 1 - - 1 - 1 -",
		"rotate3[1 - 2 - 3 - 4 -]",
	],
}

SECTION_TRANSFORMS = ["invert5", "scale2", "offset3", "mirror", "repeat2", "quantize5", "reverse", "rotate1"]

SIMPLE_DEFAULTS: typing.Dict[str, typing.Any] = {
	"rest_probability": 0.4,
	"repetition_probability": 0.3,
	"group_probability": 0.2,
}


class PatternGenerator:

	"""
	Compose pattern strings from canned style templates and random segments.

	Everything it returns is valid pattern text for ``mixtape.compiler.compile()``.
	Only ``random_sequence()`` and ``stringify()`` are used to build the
	segments, never the grammar internals.
	"""

	def __init__ (self, rng: typing.Optional[random.Random] = None, rest_symbol: str = mixtape.constants.REST_SYMBOL) -> None:

		"""
		Initialize with an optional random source (default: unseeded ``random.Random()``).
		"""

		self.rng = rng or random.Random()
		self.rest_symbol = rest_symbol


	def _segment (self, length: int, rest_probability: float, repetition_probability: float) -> str:

		"""Stringify a short ungrouped random sequence."""

		options = mixtape.options.RandomSequenceOptions(
			length = length,
			rest_probability = rest_probability,
			group_probability = 0.0,
			repetition_probability = repetition_probability
		)

		return mixtape.sequence_utils.stringify(mixtape.sequence_utils.random_sequence(options, self.rng), self.rest_symbol)


	def generate_simple (self, **options: typing.Any) -> str:

		"""
		Return a flat random pattern. Keyword arguments override ``RandomSequenceOptions`` fields.
		"""

		values = dict(SIMPLE_DEFAULTS)
		values.update(options)

		sequence = mixtape.sequence_utils.random_sequence(mixtape.options.RandomSequenceOptions(**values), self.rng)

		return mixtape.sequence_utils.stringify(sequence, self.rest_symbol)


	def simple_section (self) -> str:

		"""2-5 values, sometimes wrapped as a repeated group."""

		section = self._segment(self.rng.randint(2, 5), rest_probability=0.3, repetition_probability=0.4)

		if self.rng.random() > 0.7:
			return f"[{section}]*{self.rng.randint(2, 4)}"

		return section


	def grouped_section (self) -> str:

		"""A repeated group of 2-4 values."""

		section = self._segment(self.rng.randint(2, 4), rest_probability=0.2, repetition_probability=0.2)

		return f"[{section}]*{self.rng.randint(2, 4)}"


	def transform_section (self) -> str:

		"""3-6 values wrapped in a randomly chosen transform."""

		transform = self.rng.choice(SECTION_TRANSFORMS)
		section = self._segment(self.rng.randint(3, 6), rest_probability=0.2, repetition_probability=0.2)

		return f"{transform}[{section}]"


	def generate_complex (self, sections: int = 3) -> str:

		"""
		Join several sections, each simple, grouped or transformed.
		"""

		builders: typing.List[typing.Tuple[typing.Callable[[], str], float]] = [
			(self.simple_section, 0.3),
			(self.grouped_section, 0.3),
			(self.transform_section, 0.4),
		]

		return " ".join(mixtape.sequence_utils.weighted_choice(builders, self.rng)() for _ in range(sections))


	def generate_style (self, style: str = "generic") -> str:

		"""
		Return one of the templates for a named style, or an 8-step random pattern for any other name.
		"""

		templates = STYLE_PATTERNS.get(style.lower())

		if templates is None:
			return self._segment(8, rest_probability=0.3, repetition_probability=mixtape.constants.RANDOM_REPETITION_PROBABILITY)

		pattern = self.rng.choice(templates)

		if self.rest_symbol != mixtape.constants.REST_SYMBOL:
			pattern = pattern.replace(mixtape.constants.REST_SYMBOL, self.rest_symbol)

		return pattern


	def generate (self, complexity: str = "simple") -> str:

		"""
		Dispatch on a style name, ``"complex"``, or (for anything else) a simple pattern.
		"""

		if complexity.lower() in STYLE_PATTERNS:
			return self.generate_style(complexity)

		if complexity == "complex":
			return self.generate_complex()

		return self.generate_simple()
