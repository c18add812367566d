"""A tiny compiler for a small C-like language: tokenizer, parser, LLVM IR generator and clang driver."""

__version__ = "0.1.0"