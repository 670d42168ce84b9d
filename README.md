# rustdrill

`rustdrill` takes you through a set of small Rust exercises from the terminal.
Each exercise is a `.rs` file with a deliberate compile error, failing test or
logic mistake. You fix it. `rustdrill` then compiles it with `rustc`, or lints
it with `cargo clippy`, runs it and reports the result.

An exercise counts as done once it compiles, passes, and the
`// I AM NOT DONE` marker comment has been removed from it.

## Requirements

- Python 3.11 or newer
- A Rust toolchain with `rustc` on your `PATH`, plus `cargo` for the clippy exercises
- `git`, for `rustdrill reset`

## Installation

```
pip install .
```

## Usage

Run every command from the exercise directory, which holds `info.toml`. If
`info.toml` is missing, or `rustc --version` cannot be run, `rustdrill` prints
a message and exits with status 1.

```
rustdrill                 # welcome text and first steps
rustdrill watch           # re-verify each time you save an exercise
rustdrill verify          # check all exercises in order
rustdrill run intro1      # compile and run (or test) one exercise
rustdrill run next        # the first exercise not yet done
rustdrill hint intro1     # show the hint for an exercise
rustdrill reset intro1    # put an exercise back with `git stash -- <path>`
rustdrill list            # name, path and status of every exercise
rustdrill lsp             # write rust-project.json for rust-analyzer
```

Add `--nocapture` before the subcommand to show the output of test exercises,
for example `rustdrill --nocapture run tests1`.

`verify` and `run` exit with status 1 when an exercise fails. `verify` also
stops at the first exercise that still has its marker. An unknown exercise
name also gives status 1.

### Listing exercises

`rustdrill list` accepts:

- `--paths` / `-p`: print only the paths
- `--names` / `-n`: print only the names
- `--filter` / `-f PATTERNS`: comma-separated patterns matched against names and paths
- `--unsolved` / `-u`: only the exercises still pending
- `--solved` / `-s`: only the exercises already done

The listing ends with a line giving the number done, the total and the percentage.

### Watch mode

`rustdrill watch` verifies the exercises and stops at the first one that is
not done. It then re-checks whenever a `.rs` file under `./exercises` changes.
It checks the edited exercise first, then the others still pending. With
`--success-hints`, an exercise that passes but still has its marker is shown
together with its hint. While watch mode runs, type:

- `hint`: the hint for the current exercise
- `clear`: clear the screen
- `quit`: leave watch mode
- `!<cmd>`: run a command, such as `!rustc --explain E0381`
- `help`: list these commands

### rust-analyzer

`rustdrill lsp` adds one crate for every `.rs` file under `./exercises` and
writes the result to `./rust-project.json`. It takes the standard library
sources from `RUST_SRC_PATH`, or else from the output of
`rustc --print sysroot`.

### Plain output

Set the `NO_EMOJI` environment variable to get plain symbols in place of emoji.

## Exercise list

`info.toml` holds the exercises in order:

```toml
[[exercises]]
name = "intro1"
path = "exercises/00_intro/intro1.rs"
mode = "compile"
hint = "No hints this time ;)"
```

`mode` takes one of three values:

- `compile`: build and run a binary
- `test`: build and run the test harness
- `clippy`: build, then lint with clippy, treating warnings as errors

## Library use

- `rustdrill.exercise.load_exercises` parses the text of `info.toml` into
  `Exercise` objects.
- `Exercise.state()` returns `None` when the exercise is done. Otherwise it
  returns the `ContextLine`s around the marker.
- `Exercise.compile()` raises `CompilationError` when the build fails. It
  returns a `CompiledExercise`, which works as a context manager and removes
  the binary when closed.
- `CompiledExercise.run()` raises `ExecutionError` when the program exits
  with an error.
- `rustdrill.verify.verify` raises `VerificationFailed` for the first
  exercise that is not done.
- `rustdrill.run.run` raises `RunFailed` when the exercise fails.

## Reference solutions

The `rustdrill.solutions` package holds worked solutions in Python, with tests:

- `quizzes`: apple prices, string transformer, report cards
- `basics`: if, functions and strings
- `conversions`: `Person` parsing, `Color` conversion, byte and character counting
- `errors`: nametags, cost parsing, positive non-zero integers
- `iterators`: capitalisation, exact division, factorial, progress counting
- `hashmaps`: fruit baskets and a football scores table
- `records`: structs, message processing, a generic wrapper, cons lists

## What is not included

`rustdrill` does not ship an exercise set or an `info.toml`. You must supply
the exercise directory yourself.