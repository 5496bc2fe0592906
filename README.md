# lexdef

`lexdef` is the pattern side of a lexer generator. It takes token patterns,
written as regular expressions, and turns them into a small canonical tree
that a state-machine builder can work on without further rewriting. It also
provides byte-level access to lexer input and the set of outcomes a token
callback can produce.

## Modules

- `lexdef.mir`: the tree nodes. `Mir` is the base class. The nodes are
  `Empty`, `Loop`, `Maybe`, `Concat`, `Alternation`, `Class` and `Literal`.
  - A `Class` holds sorted, merged inclusive ranges of code points or bytes.
    It supports `in`, `union()` and `negate()`.
  - Every node has `priority()`. A literal scores 2 and a class scores 1.
    `Empty`, `Loop` and `Maybe` score 0. A concatenation scores the sum of its
    items, and an alternation scores its cheapest branch.
- `lexdef.regex`: `parse(pattern, unicode=True, case_insensitive=False)` and
  four shortcuts built on it: `utf8`, `utf8_ignore_case`, `binary` and
  `binary_ignore_case`.
  - Repetitions are expanded (`x{2,4}` becomes `x x x? x?`), groups are
    flattened and nested concatenations are merged.
  - It raises `RegexError` for malformed patterns. It also raises it for what
    a lexer without backtracking cannot honour: non-greedy repetition,
    anchors (`^`, `$`, `\A`, `\z`), word boundaries (`\b`, `\B`), and `.*` or
    `.+`.
- `lexdef.ascii_case`: `make_ascii_case_insensitive(mir)` rewrites a tree so
  that ASCII letters match in either case and leaves every other character as
  it is. `fold_class_ranges(ranges)` does the same for a list of code point
  ranges.
- `lexdef.subpattern`: named subpatterns referenced as `(?&name)`.
  - `Subpatterns.add(name, pattern)` expands the references inside the new
    pattern and checks that the result parses.
  - `Subpatterns.fix(pattern)` expands the references in any pattern.
  - Patterns may be `str`, `bytes`, or any object with a `value` attribute
    holding one of those.
  - Invalid names, names defined twice, references to names that are not
    defined, and subpatterns that do not parse all raise `SubpatternError`.
  - `bytes_to_regex_string(data)` renders bytes as regex text, writing
    non-ASCII bytes as `\xNN`.
- `lexdef.source`: `Source` wraps text (addressed by UTF-8 byte offsets) or
  bytes.
  - `read(offset, size)` returns a chunk of bytes, or `None` when the chunk
    would go out of bounds.
  - `slice(start, end)` returns `str` for text and `bytes` for binary input.
    It returns `None` for a range that is reversed, out of bounds, or not on
    character boundaries.
  - `is_boundary(index)` and `find_boundary(index)` check and find the places
    where the source can be sliced.
- `lexdef.callbacks`: `Skip`, `Emit` and `Fail`, the `skip` callback, and
  `resolve_callback(value, constructor=None, default_error=None)`. That
  function maps whatever a callback returned to exactly one outcome:

  | Returned value                 | Outcome                        |
  |--------------------------------|--------------------------------|
  | `True`                         | `Emit(constructor(None))`      |
  | `False`                        | `Fail(default_error)`          |
  | `None`                         | `Fail(default_error)`          |
  | an exception instance          | `Fail(exception)`              |
  | `Skip` (class or instance)     | `Skip()`                       |
  | `Emit(value)`                  | `Emit(constructor(value))`     |
  | `Fail(error)`                  | returned unchanged             |
  | any other value                | `Emit(constructor(value))`     |

  With no constructor, the value itself is taken to be the token.

## Installing

```
pip install .
```

## Examples

```python
from lexdef import regex

regex.utf8("foobar").priority()          # 12
regex.utf8("(foo)+").priority()          # 6
regex.utf8("[a-z]+").priority()          # 1
regex.utf8("a|[b-z]").priority()         # 1
regex.utf8("(fooz|bar)+qux").priority()  # 12

regex.utf8(r"\(.*\)")                    # raises RegexError
```

ASCII-only case folding:

```python
from lexdef import regex
from lexdef.ascii_case import fold_class_ranges, make_ascii_case_insensitive

mir = make_ascii_case_insensitive(regex.utf8("là"))
fold_class_ranges([(ord("a"), ord("d"))])   # ((65, 68), (97, 100))
```

Subpatterns:

```python
from lexdef.subpattern import Subpatterns

subs = Subpatterns()
subs.add("digit", "[0-9]")
subs.fix("(?&digit)+")   # "(?:[0-9])+"
```

Sources and callback outcomes:

```python
from lexdef.source import Source
from lexdef.callbacks import Emit, Fail, resolve_callback

src = Source("λόγος")
src.slice(0, 2)       # "λ"
src.is_boundary(1)    # False

resolve_callback(42, constructor=lambda n: ("Number", n))  # Emit(value=("Number", 42))
resolve_callback(None, default_error="other")              # Fail(error="other")
```

## What it does not do

`lexdef` stops at the pattern tree. It does not build a state machine from
the trees, does not generate or run a lexer, and does not read token
definitions from attributes or files. It has no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```