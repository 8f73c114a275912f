"""Command-line front end.

Usage::

    python -m mixtape "1 [2 -]*2 scale2[1 2 3]"
    python -m mixtape --config mixtape.yaml --verbose "invert5[1 9]"
    python -m mixtape --random --length 8 --seed 42
    python -m mixtape --style house

The config file is YAML with optional ``compile:`` and ``random:`` sections,
whose keys are the ``CompileOptions`` and ``RandomSequenceOptions`` fields.
Command-line flags override the file.
"""

import argparse
import logging
import random
import sys
import typing

import mixtape.compiler
import mixtape.options
import mixtape.pattern_generator
import mixtape.sequence_utils


# Configure logging
logging.basicConfig(level=logging.INFO)


def build_parser () -> argparse.ArgumentParser:

	"""
	Build the argument parser.
	"""

	parser = argparse.ArgumentParser(prog="mixtape", description="Compile step patterns into flat sequences.")

	parser.add_argument("pattern", nargs="?", help="pattern to compile, e.g. \"1 [2 -]*2\"")
	parser.add_argument("--config", help="YAML config file")
	parser.add_argument("--max-depth", type=int, dest="max_recursion_depth", help="maximum bracket nesting")
	parser.add_argument("--rest-symbol", help="literal used for rests (default '-')")
	parser.add_argument("--normalize", action="store_true", default=None, help="normalize the compiled sequence")
	parser.add_argument("--verbose", action="store_true", default=None, help="log diagnostics as warnings")
	parser.add_argument("--seed", type=int, help="seed for randomised transforms and generators")
	parser.add_argument("--random", action="store_true", help="print a random sequence instead of compiling")
	parser.add_argument("--length", type=int, help="length of the random sequence")
	parser.add_argument("--style", help="print a generated pattern: dnb, house, minimal, glitch, complex or simple")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the mixtape command.
	"""

	parser = build_parser()
	args = parser.parse_args(argv)

	config = mixtape.options.load_config(args.config) if args.config else {}
	rng = random.Random(args.seed) if args.seed is not None else None

	try:
		compile_options = mixtape.options.compile_options_from_config(
			config,
			max_recursion_depth = args.max_recursion_depth,
			rest_symbol = args.rest_symbol,
			normalize = args.normalize,
			verbose = args.verbose,
			seed = args.seed
		)

		if args.style:
			generator = mixtape.pattern_generator.PatternGenerator(rng=rng, rest_symbol=compile_options.rest_symbol)
			print(generator.generate(args.style))
			return 0

		if args.random:
			random_options = mixtape.options.random_options_from_config(config, length=args.length, seed=args.seed)
			sequence = mixtape.sequence_utils.random_sequence(random_options, rng)
			print(mixtape.sequence_utils.stringify(sequence, compile_options.rest_symbol))
			return 0

	except ValueError as e:
		parser.error(str(e))

	if not args.pattern:
		parser.error("a pattern is required unless --random or --style is given")

	sequence = mixtape.compiler.compile(args.pattern, compile_options, rng)
	print(mixtape.sequence_utils.stringify(sequence, compile_options.rest_symbol))

	return 0


if __name__ == "__main__":
	sys.exit(main())
