import logging
import typing

import pytest

import mixtape.errors


@pytest.fixture
def diagnostics (caplog: pytest.LogCaptureFixture) -> typing.Callable[[], typing.List[mixtape.errors.PatternError]]:

	"""Capture every mixtape diagnostic (at any level) and return a getter for them."""

	caplog.set_level(logging.DEBUG, logger="mixtape")

	def collected () -> typing.List[mixtape.errors.PatternError]:

		"""Return the diagnostics logged so far, oldest first."""

		return [record.diagnostic for record in caplog.records if hasattr(record, "diagnostic")]

	return collected
