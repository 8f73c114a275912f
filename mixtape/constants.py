"""Default values for pattern compilation and generation.

- `REST_SYMBOL = "-"` is the literal for a rest, both in patterns and in stringified output.
- `MAX_RECURSION_DEPTH = 10` is the default number of nested bracket levels a compile will expand.
- `MAX_RECURSION_DEPTH_LIMIT = 256` is the ceiling any configured depth must stay under.
- `MAX_REPEAT_COUNT = 4096` is the largest `*count` or `repeat` parameter a pattern may use.
- `MAX_SEQUENCE_LENGTH = 1_000_000` is the most steps any compiled (sub-)sequence may hold.
"""

REST_SYMBOL = "-"

MAX_RECURSION_DEPTH = 10
MAX_RECURSION_DEPTH_LIMIT = 256

MAX_REPEAT_COUNT = 4096
MAX_SEQUENCE_LENGTH = 1_000_000

# Random sequence generation

RANDOM_LENGTH = 16
RANDOM_MIN_VALUE = 1
RANDOM_MAX_VALUE = 99
RANDOM_REST_PROBABILITY = 0.3
RANDOM_GROUP_PROBABILITY = 0.2
RANDOM_REPETITION_PROBABILITY = 0.4

# Runs (grouped or repeated) are 2-4 steps long
RUN_MIN = 2
RUN_MAX = 4

# Transforms

SPARSE_DEFAULT_PERCENT = 50
ROTATE_DEFAULT_STEPS = 1
