"""Command line driver: tokenize, parse, generate IR and link an executable."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .ast import ParseError, parse_program
from .irgen import CodegenError, build_executable, generate_ir
from .tokenizer import TokenizeError, format_tokens, tokenize


def compile_source(source: str) -> str:
    """Compile source text to IR text."""
    return generate_ir(parse_program(tokenize(source)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="minicomp", description="Compile a source file.")
    parser.add_argument("source", nargs="?", help="file to compile")
    parser.add_argument("-o", "--output", default="output", help="executable to create")
    args = parser.parse_args(argv)

    if args.source is None:
        print("[-] You should specify an argument", file=sys.stderr)
        return 1
    try:
        text = Path(args.source).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError:
        print(f"[-] Can't find {args.source}", file=sys.stderr)
        return 1

    try:
        tokens = tokenize(text)
        print("------- FINAL TOKENS -------")
        print(format_tokens(tokens))
        print("------ Instructions -------")
        functions = parse_program(tokens)
        for function in functions:
            print(f"[~] Defined functions: {function.name}")
        print("------ IR Generation -------")
        ir = generate_ir(functions)
        print(f"Generated IR:\n{ir}")
        print("----------------------------")
        print("[+] Linking to create executable...")
        build_executable(ir, args.output)
    except (TokenizeError, ParseError, CodegenError) as exc:
        print(f"[-] {exc}", file=sys.stderr)
        return 1

    print(f"[+] Executable '{args.output}' created successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())