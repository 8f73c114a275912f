import dataclasses
import typing


@dataclasses.dataclass(frozen=True)
class Note:

	"""
	A sounding step carrying an integer value (pitch, velocity, or any other magnitude).
	"""

	value: int


@dataclasses.dataclass(frozen=True)
class Rest:

	"""
	A silent step.
	"""


REST = Rest()

Step = typing.Union[Note, Rest]
Sequence = typing.List[Step]


def is_note (step: Step) -> bool:

	"""Return True if the step carries a value."""

	return isinstance(step, Note)


def notes (*values: typing.Optional[int]) -> Sequence:

	"""Build a sequence from integers, with ``None`` standing in for a rest.

	Example:
		```python
		mixtape.steps.notes(1, None, 3)  # [Note(1), REST, Note(3)]
		```
	"""

	return [REST if value is None else Note(value) for value in values]
