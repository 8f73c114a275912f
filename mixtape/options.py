import dataclasses
import logging
import os
import typing

import yaml

import mixtape.constants


logger = logging.getLogger(__name__)

_FORBIDDEN_REST_CHARACTERS = "[]*"


@dataclasses.dataclass(frozen=True)
class CompileOptions:

	"""
	Settings for a single compilation.

	Options are read-only for the duration of a compile. The recursion depth
	reached so far is not stored here; it travels as an explicit argument.

	Parameters:
		max_recursion_depth: Nested bracket levels to expand before truncating (default 10).
		rest_symbol: The literal that means "rest" in patterns and in output (default ``-``).
		normalize: Run ``mixtape.sequence_utils.normalize()`` over the result.
		verbose: Log diagnostics at WARNING instead of DEBUG.
		seed: Seed for the random source used by ``scramble`` and ``sparse``
			when no ``rng`` is passed.
	"""

	max_recursion_depth: int = mixtape.constants.MAX_RECURSION_DEPTH
	rest_symbol: str = mixtape.constants.REST_SYMBOL
	normalize: bool = False
	verbose: bool = False
	seed: typing.Optional[int] = None

	def __post_init__ (self) -> None:

		"""Validate field values."""

		if isinstance(self.max_recursion_depth, bool) or not isinstance(self.max_recursion_depth, int):
			raise ValueError(f"max_recursion_depth must be an integer, got {self.max_recursion_depth!r}")

		if not 0 <= self.max_recursion_depth <= mixtape.constants.MAX_RECURSION_DEPTH_LIMIT:
			raise ValueError(f"max_recursion_depth must be between 0 and {mixtape.constants.MAX_RECURSION_DEPTH_LIMIT}")

		if not isinstance(self.rest_symbol, str) or not self.rest_symbol:
			raise ValueError("rest_symbol must be a non-empty string")

		if any(c.isspace() or c in _FORBIDDEN_REST_CHARACTERS for c in self.rest_symbol):
			raise ValueError(f"rest_symbol cannot contain whitespace, brackets or '*': {self.rest_symbol!r}")


@dataclasses.dataclass(frozen=True)
class RandomSequenceOptions:

	"""
	Settings for ``mixtape.sequence_utils.random_sequence()``.
	"""

	length: int = mixtape.constants.RANDOM_LENGTH
	min_value: int = mixtape.constants.RANDOM_MIN_VALUE
	max_value: int = mixtape.constants.RANDOM_MAX_VALUE
	rest_probability: float = mixtape.constants.RANDOM_REST_PROBABILITY
	group_probability: float = mixtape.constants.RANDOM_GROUP_PROBABILITY
	repetition_probability: float = mixtape.constants.RANDOM_REPETITION_PROBABILITY
	seed: typing.Optional[int] = None

	def __post_init__ (self) -> None:

		"""Validate field values."""

		if self.length < 0:
			raise ValueError(f"length cannot be negative ({self.length})")

		if self.min_value > self.max_value:
			raise ValueError(f"min_value ({self.min_value}) must be <= max_value ({self.max_value})")

		for name in ("rest_probability", "group_probability", "repetition_probability"):
			value = getattr(self, name)
			if not 0.0 <= value <= 1.0:
				raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")


OptionsType = typing.TypeVar("OptionsType", CompileOptions, RandomSequenceOptions)


def from_mapping (cls: typing.Type[OptionsType], values: typing.Optional[typing.Mapping[str, typing.Any]]) -> OptionsType:

	"""Build an options object from a plain mapping, rejecting unknown keys."""

	if not values:
		return cls()

	known = {field.name for field in dataclasses.fields(cls)}
	unknown = sorted(set(values) - known)

	if unknown:
		raise ValueError(f"Unknown {cls.__name__} keys: {', '.join(unknown)}")

	return cls(**values)


def load_config (config_path: str) -> dict:

	"""
	Load configuration from a YAML file.

	The file may contain a ``compile:`` section (``CompileOptions`` fields)
	and a ``random:`` section (``RandomSequenceOptions`` fields).
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	return config


def compile_options_from_config (config: typing.Mapping[str, typing.Any], **overrides: typing.Any) -> CompileOptions:

	"""Build ``CompileOptions`` from the ``compile:`` section, with non-None overrides applied on top."""

	values = dict(config.get("compile") or {})
	values.update({key: value for key, value in overrides.items() if value is not None})

	return from_mapping(CompileOptions, values)


def random_options_from_config (config: typing.Mapping[str, typing.Any], **overrides: typing.Any) -> RandomSequenceOptions:

	"""Build ``RandomSequenceOptions`` from the ``random:`` section, with non-None overrides applied on top."""

	values = dict(config.get("random") or {})
	values.update({key: value for key, value in overrides.items() if value is not None})

	return from_mapping(RandomSequenceOptions, values)
