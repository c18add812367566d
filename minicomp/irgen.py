"""Emit textual LLVM IR for parsed functions and link it with clang."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Union

from .ast import Function, NodeType, ReturnType, get_function_by_name

_PLAIN_SYMBOL = re.compile(r"[-a-zA-Z$._][-a-zA-Z$._0-9]*\Z")
_STRING_BASE = "str_const"
_PUTS = "puts"


class CodegenError(RuntimeError):
    """Raised when IR cannot be generated or the executable cannot be built."""


def _escape(data: bytes) -> str:
    return "".join(
        chr(byte) if 0x20 <= byte < 0x7F and byte not in (0x22, 0x5C) else f"\\{byte:02X}"
        for byte in data
    )


def _encode(text: str) -> bytes:
    return text.encode("utf-8", errors="surrogateescape")


def _symbol(prefix: str, name: str) -> str:
    if _PLAIN_SYMBOL.match(name):
        return prefix + name
    return f'{prefix}"{_escape(_encode(name))}"'


def _i32(value: int) -> int:
    """Truncate to 32 bits and read back as a signed value."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


class _LocalNames:
    """Hands out unique local value names and sequential unnamed temporaries."""

    def __init__(self) -> None:
        self._used: Set[str] = set()
        self._suffix = 0
        self._temps = 0

    def claim(self, base: str) -> str:
        if not base:
            return self.temp()
        name = base
        while name in self._used:
            self._suffix += 1
            name = f"{base}{self._suffix}"
        self._used.add(name)
        return _symbol("%", name)

    def temp(self) -> str:
        name = f"%{self._temps}"
        self._temps += 1
        return name


class ModuleBuilder:
    """Accumulates globals and functions of one IR module."""

    def __init__(self, name: str = "module"):
        self.name = name
        self._globals: List[str] = []
        self._global_names: Set[str] = set()
        self._functions: List[str] = []
        self._declared: Dict[str, int] = {}

    def _claim_global(self, base: str) -> str:
        name = base
        counter = 0
        while name in self._global_names:
            counter += 1
            name = f"{base}.{counter}"
        self._global_names.add(name)
        return name

    def _add_string(self, text: str) -> str:
        data = _encode(text)
        symbol = _symbol("@", self._claim_global(_STRING_BASE))
        self._globals.append(
            f'{symbol} = private unnamed_addr constant [{len(data) + 1} x i8] '
            f'c"{_escape(data)}\\00", align 1'
        )
        return symbol

    def _ensure_puts(self) -> None:
        if _PUTS in self._global_names:
            return
        self._global_names.add(_PUTS)
        self._declared[_PUTS] = len(self._functions)
        self._functions.append(f"declare i32 @{_PUTS}(ptr)")

    def add_function(self, function: Function) -> str:
        """Emit a function definition and return the symbol name it received."""
        name = self._claim_global(function.name)
        lines = [f"define i32 {_symbol('@', name)}() {{", "entry:"]
        local = _LocalNames()
        pending_puts = False
        pending_globals: List[str] = []

        for node in function.body:
            if node.type is NodeType.ASSIGN_INT:
                var = local.claim(node.name)
                lines.append(f"  {var} = alloca i32, align 4")
                lines.append(f"  store i32 {_i32(node.number)}, ptr {var}, align 4")
            elif node.type is NodeType.PRINT:
                symbol = self._add_string(node.name)
                pending_globals.append(symbol)
                pending_puts = True
                lines.append(f"  {local.temp()} = call i32 @{_PUTS}(ptr {symbol})")
            elif node.type is NodeType.RETURN:
                if function.return_type is ReturnType.VOID:
                    lines.append("  ret void")
                else:
                    lines.append(f"  ret i32 {_i32(node.number)}")
            else:
                raise CodegenError(f"Can't generate the IR for the function {function.name}")

        lines.append("}")
        self._functions.append("\n".join(lines))
        if pending_puts:
            self._ensure_puts()
        return name

    def render(self) -> str:
        """Return the module as IR text."""
        parts = [f"; ModuleID = '{self.name}'\nsource_filename = \"{self.name}\""]
        if self._globals:
            parts.append("\n".join(self._globals))
        parts.extend(self._functions)
        return "\n\n".join(parts) + "\n"


def generate_ir(functions: Sequence[Function]) -> str:
    """Generate IR for the program's main function."""
    main_function = get_function_by_name("main", functions)
    if main_function is None:
        raise CodegenError("Main entry point don't exist")
    builder = ModuleBuilder("module")
    builder.add_function(main_function)
    return builder.render()


def build_executable(
    ir: str,
    output: Union[str, Path] = "output",
    workdir: Optional[Union[str, Path]] = None,
) -> Path:
    """Write the IR next to the output and link it into an executable with clang."""
    directory = Path(workdir) if workdir is not None else Path.cwd()
    output_path = directory / output
    ir_path = output_path.with_name(output_path.name + ".ll")
    ir_path.write_text(ir, encoding="utf-8", errors="surrogateescape")
    try:
        result = subprocess.run(
            ["clang", str(ir_path), "-o", str(output_path)],
            cwd=directory,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CodegenError("Linking failed: clang was not found") from exc
    if result.returncode != 0:
        detail = (result.stderr or "").strip()
        raise CodegenError(f"Linking failed{': ' + detail if detail else ''}")
    return output_path