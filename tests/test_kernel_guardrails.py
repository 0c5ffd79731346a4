"""Guardrails to keep the kernel free of terminal I/O.

The kernel must never write to stdout: anything printed there by an
invoking shell hook is evaluated as shell code.
"""

import re
from pathlib import Path


FORBIDDEN_PATTERNS = {
    "argparse": re.compile(r"\bargparse\b"),
    "print(": re.compile(r"(?<![A-Za-z0-9_])print\s*\("),
    "input(": re.compile(r"(?<![A-Za-z0-9_])input\s*\("),
    "sys.stdout": re.compile(r"\bsys\.stdout\b"),
    "subprocess": re.compile(r"\bsubprocess\b"),
}


def test_kernel_has_no_forbidden_tokens():
    kernel_dir = Path(__file__).resolve().parents[1] / "src" / "durrrrrenv" / "kernel"
    offenders = []

    for path in kernel_dir.glob("*.py"):
        contents = path.read_text(encoding="utf-8")
        for token, pattern in FORBIDDEN_PATTERNS.items():
            if pattern.search(contents):
                offenders.append(f"{path.name}: {token}")

    assert not offenders, "Forbidden kernel tokens found: " + ", ".join(offenders)
