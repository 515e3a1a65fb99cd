# SPDX-License-Identifier: MIT
"""Turn preprocessed C++ header output into cffi declarations.

FastNoise_C.h uses ``bool``, so it is preprocessed as C++. The output
still carries things cffi's C parser cannot read: line markers, the
``extern "C"`` block and export attributes. Only text that originates
from files inside the header's own include directory is kept, so
declarations from system headers never leak into the result.
"""

from __future__ import annotations

import re
from pathlib import Path

# `# 12 "path/to/file.h" 1 3`
_LINE_MARKER = re.compile(r'^#\s*(?:line\s+)?\d+\s+"(?P<file>(?:[^"\\]|\\.)*)"')
_EXTERN_C_OPEN = re.compile(r'extern\s+"C"\s*\{')
_EXTERN_C_DECL = re.compile(r'extern\s+"C"\s+')
_ATTRIBUTES = re.compile(
    r"__attribute__\s*\(\((?:[^()]|\([^()]*\))*\)\)|__declspec\s*\(\s*\w+\s*\)|\[\[.*?\]\]"
)
_CALLING_CONVENTIONS = re.compile(r"\b(?:__cdecl|__stdcall)\b")


def _is_inside(path: str, include_dir: Path) -> bool:
    candidate = Path(path.replace("\\\\", "\\"))
    try:
        candidate.resolve().relative_to(include_dir.resolve())
    except ValueError:
        return False
    return True


def _strip_extern_c(text: str) -> str:
    """Remove ``extern "C" { ... }`` wrappers, keeping their contents."""
    while True:
        match = _EXTERN_C_OPEN.search(text)
        if match is None:
            break
        depth = 1
        pos = match.end()
        while pos < len(text) and depth:
            if text[pos] == "{":
                depth += 1
            elif text[pos] == "}":
                depth -= 1
            pos += 1
        inner = text[match.end() : pos - 1] if depth == 0 else text[match.end() :]
        text = text[: match.start()] + inner + text[pos:]
    return _EXTERN_C_DECL.sub("", text)


def translate(preprocessed: str, include_dir: Path) -> str:
    """Return cffi ``cdef`` text for the declarations in ``preprocessed``.

    Args:
        preprocessed: Output of ``clang -E`` (with line markers).
        include_dir: The directory holding the header and its relative
            includes. Text from files outside it is dropped.
    """
    kept: list[str] = []
    keep = True
    for line in preprocessed.splitlines():
        marker = _LINE_MARKER.match(line)
        if marker:
            keep = _is_inside(marker.group("file"), include_dir)
            continue
        if line.startswith("#"):
            # #pragma and other directives survive preprocessing.
            continue
        if keep:
            kept.append(line)

    text = _strip_extern_c("\n".join(kept))
    text = _ATTRIBUTES.sub("", text)
    text = _CALLING_CONVENTIONS.sub("", text)

    lines: list[str] = []
    for line in text.splitlines():
        line = " ".join(line.split())
        if line:
            lines.append(line)
    return "\n".join(lines) + "\n" if lines else ""
