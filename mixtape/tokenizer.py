import logging
import re
import typing

import mixtape.errors


logger = logging.getLogger(__name__)

RE_IDENTIFIER = re.compile(r"^[A-Za-z]+\d*$")


def tokenize (text: str, verbose: bool = True) -> typing.List[str]:

	"""
	Split a pattern string into its top-level raw tokens.

	A single left-to-right scan tracks bracket depth. Whitespace only separates
	tokens at depth 0, so a bracketed group (however deeply nested) is always
	one token.

	**Rules:**
	- An identifier written directly before ``[`` is fused into the bracket
	  token, which makes it a transform call (``scale2[1 2]``).
	- A closing bracket that returns to depth 0 ends the token, unless it is
	  directly followed by ``*``. The ``*`` and its count (everything up to the
	  next whitespace or bracket) then stay in the same token (``[1 2]*3``).
	- ``*`` only binds to text directly before it. ``3 *4`` is two tokens,
	  ``3`` and ``*4``, and the second one is rejected later.

	Failures are soft. A stray ``]`` is dropped, and an unclosed bracket drops
	only the unfinished token. Both are reported through ``mixtape.errors.report()``.

	Example:
		```python
		tokenize("1 scale2[1 [2 3]] [4 -]*2 5*3")
		# ["1", "scale2[1 [2 3]]", "[4 -]*2", "5*3"]
		```
	"""

	tokens: typing.List[str] = []
	current = ""
	depth = 0
	index = 0
	length = len(text)

	while index < length:

		char = text[index]

		if depth > 0:

			current += char
			index += 1

			if char == "[":
				depth += 1

			elif char == "]":
				depth -= 1

				if depth == 0:

					if index < length and text[index] == "*":
						end = index + 1
						while end < length and not text[end].isspace() and text[end] not in "[]":
							end += 1
						current += text[index:end]
						index = end

					tokens.append(current)
					current = ""

			continue

		if char.isspace():

			if current:
				tokens.append(current)
				current = ""

		elif char == "[":

			# Anything other than a transform name before the bracket is its own token.
			if current and not RE_IDENTIFIER.match(current):
				tokens.append(current)
				current = ""

			current += char
			depth = 1

		elif char == "]":

			if current:
				tokens.append(current)
				current = ""

			mixtape.errors.report(logger, mixtape.errors.MalformedToken(f"Unmatched ']' at position {index}"), verbose)

		else:
			current += char

		index += 1

	if depth > 0:
		mixtape.errors.report(logger, mixtape.errors.UnbalancedBrackets(f"{depth} unclosed bracket(s) in {current!r}"), verbose)

	elif current:
		tokens.append(current)

	return tokens
