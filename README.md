# rustdrill

A command-line runner for working through small Rust exercises. It compiles
each exercise with `rustc`, or checks it with Clippy. It then runs the program
or its test harness and tells you what to fix next. The `rustdrill.drills`
package holds reference solutions to the exercises, written in Python.

## Requirements

- Python 3.11 or later
- A Rust toolchain with `rustc` on your `PATH`. The Clippy exercises also need
  `cargo clippy`.

## Installation

```
pip install rustdrill
```

## What you need to provide

The package does not ship the Rust exercise files or the exercise list. Every
command runs in a directory that holds:

- `info.toml`, the exercise list. Each `[[exercises]]` entry has a `name`, a
  `path`, a `mode` (`compile`, `test` or `clippy`) and a `hint`.
- the exercise files named in it, usually under `exercises/`. `watch` watches
  that directory.
- `default_out.txt`, the text shown when `rustdrill` runs without a
  subcommand.

If `info.toml` is missing, or `rustc --version` cannot be run, the command
prints a message and exits with status 1.

## Usage

```
rustdrill                 # print the welcome banner and default_out.txt
rustdrill verify          # check every exercise in the listed order
rustdrill watch           # verify, then verify again whenever a .rs file changes
rustdrill run NAME        # compile and run (or test) one exercise
rustdrill hint NAME       # print the hint for one exercise
rustdrill list            # list all exercises with their status
rustdrill --version       # print the version
```

Put `--nocapture` before the subcommand to see the output of test exercises,
for example `rustdrill --nocapture run tests1`.

`verify` stops at the first exercise that fails to compile, fails to run or
fails its tests. It also stops at the first exercise that still carries its
pending marker, and then exits with status 1. `run` and `hint` exit with
status 1 when no exercise has the given name.

`list` takes these options:

- `-p`, `--paths`: show only the exercise paths
- `-n`, `--names`: show only the exercise names
- `-f`, `--filter PATTERNS`: comma-separated substrings, matched in lower case
  against names and paths
- `-u`, `--unsolved`: show only exercises not yet solved
- `-s`, `--solved`: show only solved exercises

It ends with a progress line giving the number and percentage of finished
exercises.

In watch mode, type `hint` to see the hint for the exercise that failed last,
or `clear` to clear the screen. When every exercise is done, watch prints a
closing message and exits.

### Marking an exercise as done

Each exercise file carries a `// I AM NOT DONE` comment. An exercise counts as
done once that line is gone, whether or not it compiles. When an exercise
compiles and passes but the marker is still there, the runner shows the lines
around the marker and waits for you to remove it.

Set the `NO_EMOJI` environment variable to print plain symbols instead of
emoji.

Compiled binaries are written to the current directory as
`temp_<pid>_<thread>` and removed afterwards. Clippy exercises write
`exercises/clippy/Cargo.toml`.

## Using the runner from Python

```python
from rustdrill.exercise import load_exercises
from rustdrill.verify import VerificationFailed, verify

exercises = load_exercises("info.toml")
try:
    verify(exercises)
except VerificationFailed as failure:
    print(failure.exercise.hint)
```

`Exercise.state()` returns a `State`. Its `done` flag tells whether the marker
is gone. Its `context` holds the `ContextLine`s around the marker.
`Exercise.compile()` raises `CompilationError` on failure. The
`CompiledExercise` it returns can be used as a context manager. Its `run()`
raises `ExecutionError` when the binary fails.

## Reference solutions

`rustdrill.drills` holds these modules:

- `conversions`: byte and character counts, `Person` parsing, `Color.try_from`,
  `average`
- `errors`: name tags, `total_cost`, `purchase`, `PositiveNonzeroInteger`,
  `read_and_validate`
- `collections`: fruit baskets, `build_scores_table`, list helpers
- `iterators`: capitalisation, `divide`, `factorial`, progress counting, cons
  lists
- `basics`: small functions such as `calculate_apple_price`, `bigger` and
  `fizz_if_foo`
- `types`: `Wrapper`, `ReportCard`, `Order`, `Package`, message processing with
  `GameState`, `append_bar`
- `concurrency`: `offset_sums` over threads, `JobStatus` and `watch_jobs`

```python
from rustdrill.drills.conversions import Color, Person

Person.from_text("Mark,20")          # Person(name='Mark', age=20)
Color.try_from((183, 65, 14))        # Color(red=183, green=65, blue=14)
```

## Running the tests

```
pip install "rustdrill[test]"
pytest
```