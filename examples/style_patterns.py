import random

import mixtape

rng = random.Random(2024)
generator = mixtape.PatternGenerator(rng=rng)

# A bar of each style, compiled into steps and printed as a grid
for style in ["house", "dnb", "minimal", "glitch"]:
	pattern = generator.generate_style(style)
	steps = mixtape.compile(pattern, rng=rng)
	grid = "".join("x" if mixtape.steps.is_note(step) else "." for step in steps)
	print(f"{style:>8}  {grid:<32}  {pattern}")

# Transforms stack: mirror a rising line, then thin it out
print(mixtape.stringify(mixtape.compile("sparse25[mirror[offset60[0 2 4 7]]]", {"seed": 1})))

# Random material for a live session
print(mixtape.stringify(mixtape.random_sequence({"length": 16, "group_probability": 0.0}, rng)))
