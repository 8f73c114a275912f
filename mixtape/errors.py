"""Failure taxonomy for pattern compilation.

Every error here is recoverable. The grammar and transform layers raise them,
and the per-token and per-transform seams catch them and hand them to
``report()``. The offending token then contributes nothing, or the transform
passes its input through. Nothing escapes ``mixtape.compiler.compile()``.
"""

import logging


class PatternError (Exception):

	"""Base class for all pattern diagnostics."""


class InvalidInput (PatternError):

	"""The top-level pattern (or its options) could not be used at all."""


class UnbalancedBrackets (PatternError):

	"""A bracket was opened and never closed."""


class MalformedToken (PatternError):

	"""A token that matches no grammar rule, e.g. ``]*`` with no count or ``*3`` with no operand."""


class UnknownToken (MalformedToken):

	"""A token that is not a value, rest, group, repeat or transform call."""


class UnknownTransform (PatternError):

	"""A transform name with no registry entry."""


class MissingRequiredParameter (PatternError):

	"""A transform that needs a numeric parameter was called without one."""


class InvalidParameter (PatternError):

	"""A transform parameter outside the transform's domain (e.g. ``quantize0``)."""


class RecursionLimitExceeded (PatternError):

	"""Bracket nesting went deeper than ``max_recursion_depth``."""


class OutputLimitExceeded (PatternError):

	"""A token would grow the compiled sequence past ``MAX_SEQUENCE_LENGTH`` steps."""


def report (logger: logging.Logger, error: PatternError, verbose: bool = True) -> None:

	"""Emit a diagnostic for a recovered error.

	Verbose diagnostics are logged at WARNING, otherwise at DEBUG, so they can
	be suppressed without being lost. The exception instance is attached to the
	log record as ``record.diagnostic``.
	"""

	level = logging.WARNING if verbose else logging.DEBUG

	logger.log(level, f"{type(error).__name__}: {error}", extra={"diagnostic": error})
