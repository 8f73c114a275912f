"""
Mixtape - a compiler for compact step-sequence patterns.

A pattern is a line of text such as ``"1 - [3 4]*2 scale2[1 2 3]"``. It
compiles into a flat list of steps, where each step is a ``Note`` carrying an
integer (a pitch, a velocity, anything the host wants) or a ``Rest``.

Grammar:

- **Values and rests.** ``1 2 3`` are notes; ``-`` is a rest.
- **Repetition.** ``5*4`` and ``-*4`` repeat a value or rest; ``[1 2]*3``
  repeats a group. The ``*`` must touch what it repeats.
- **Groups.** ``[...]`` nests freely; a group is spliced in place.
- **Transforms.** ``name[...]`` applies a transform to the compiled group,
  with the parameter fused onto the name: ``invert5``, ``scale2``,
  ``offset3``, ``quantize4``, ``repeat2``, ``rotate1``, ``sparse25``,
  ``mirror``, ``reverse``, ``scramble``, ``interleave``.

Compilation never raises. A bad token, an unbalanced bracket, an unknown
transform, or nesting deeper than ``max_recursion_depth`` skips only the part
that failed, and logs a diagnostic (at WARNING with ``verbose=True``, else at
DEBUG).

Minimal example:

    ```python
    import mixtape

    mixtape.compile("1 [2 -]*2 invert5[1 9]")
    # [Note(1), Note(2), REST, Note(2), REST, Note(9), Note(1)]

    mixtape.stringify(mixtape.compile("mirror[1 2 3]"))
    # "1 2 3 2 1"
    ```

Package-level exports: ``compile``, ``apply``, ``stringify``, ``normalize``,
``random_sequence``, ``register_transform``, ``CompileOptions``,
``RandomSequenceOptions``, ``PatternGenerator``, ``Note``, ``Rest``, ``REST``.
"""

import mixtape.compiler
import mixtape.options
import mixtape.pattern_generator
import mixtape.sequence_utils
import mixtape.steps
import mixtape.transforms


compile = mixtape.compiler.compile
apply = mixtape.transforms.apply
stringify = mixtape.sequence_utils.stringify
normalize = mixtape.sequence_utils.normalize
random_sequence = mixtape.sequence_utils.random_sequence
register_transform = mixtape.transforms.register_transform
CompileOptions = mixtape.options.CompileOptions
RandomSequenceOptions = mixtape.options.RandomSequenceOptions
PatternGenerator = mixtape.pattern_generator.PatternGenerator
Note = mixtape.steps.Note
Rest = mixtape.steps.Rest
REST = mixtape.steps.REST
