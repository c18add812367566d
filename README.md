# minicomp

A small compiler for a tiny C-like language. It tokenizes a source file,
parses every function definition in it, generates textual LLVM IR for the
`main` function and links that IR into a native executable with `clang`.

## Installation

```
pip install .
```

Tokenizing, parsing and IR generation need nothing outside Python.
Building the executable needs `clang` on your `PATH`.

## The language

The tokenizer knows the keywords `int`, `float` and `void`, identifiers
(letters, digits and `_`), integer literals, string literals in double
quotes and the symbols `= , ; { } ( ) > < & &&`. Any other character is
an error.

A function is a return type (`int`, `float` or `void`), a name and a
parameter list such as `(int a, float b)`. Its body may contain:

- `int x;` and `int x = 5;`
- `return <integer>;`
- a string literal followed by `;`, which prints the string with `puts`
- `if () { ... }` with an empty condition; the body is parsed, but such a
  statement cannot be turned into IR

Example:

```c
int main() {
    "Hello, world";
    int answer = 42;
    return 0;
}
```

## Command line

```
minicomp hello.c
minicomp hello.c -o hello
```

The command prints the token listing, the names of the functions it
found and the generated IR. It then writes the IR to `<output>.ll` in the
current directory and runs `clang` on it to produce the executable
`<output>` (`output` unless `-o/--output` says otherwise). It exits with
status 1 when no file is given, the file cannot be read, the source has a
syntax error, there is no `main` function, or linking fails; otherwise it
exits with 0.

## Library use

```python
from minicomp.tokenizer import tokenize, format_tokens
from minicomp.ast import parse_program, get_function_by_name
from minicomp.irgen import generate_ir, build_executable
from minicomp.cli import compile_source

tokens = tokenize('int main() { "hi"; return 0; }')
print(format_tokens(tokens))

functions = parse_program(tokens)
main_fn = get_function_by_name("main", functions)
print(main_fn.node_count)

ir = generate_ir(functions)
print(ir)
```

- `minicomp.tokenizer`: `tokenize(source)` takes a string or a text file
  and returns a list of `Token` objects that always ends with an EOF
  token; `token_type_name` and `format_tokens` render them.
- `minicomp.ast`: `Parser` and `parse_program(tokens)` build `Function`
  objects whose bodies are lists of `Node`; `parse_params` reads a
  parameter list; `get_function_by_name` looks a function up.
- `minicomp.irgen`: `ModuleBuilder` collects functions and string
  constants and `render()`s the module; `generate_ir(functions)` builds
  a module holding `main`; `build_executable(ir, output, workdir)` writes
  `<output>.ll` into `workdir` (the current directory by default), links
  it with `clang` and returns the path of the executable.
- `minicomp.cli`: `compile_source(source)` runs tokenizer, parser and IR
  generator in one step and returns the IR text; `main(argv)` is the
  command.

Errors are raised as exceptions: `TokenizeError` from
`minicomp.tokenizer`, `ParseError` from `minicomp.ast` and
`CodegenError` from `minicomp.irgen`.

## What it does not do

- Only `main` is compiled; other functions are parsed but left out of
  the IR.
- Every generated function is declared as returning `i32` and taking no
  parameters, whatever its return type and parameter list say.
- There are no expressions, `float` or `char` variables, loops or
  function calls; `if` statements are parsed but not compiled.
- There is no optimisation and no object file of its own: assembling and
  linking are left entirely to `clang`.