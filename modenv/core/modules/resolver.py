"""
Identifier resolution.

Turns a requested identifier (plus an optional calling record's package and
path) into the ordered list of keys the environment should try. Nothing in
here touches registry state, so the search order can be checked on its own.

Two modes:
  - relative ("./x", "../x"): path keyspace of the caller's package, with
    extension / index lookup
  - package ("a/b/c"): module keyspace, shifting trailing segments from the
    package name into a "./"-prefixed module name
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

SEP = "/"
MAIN_MODULE = "."

# Tried in order after the exact path.
PATH_SUFFIXES: Tuple[str, ...] = (
    ".js",
    "/index.js",
    ".ejs",
    "/index.ejs",
    ".cjs",
    "/index.cjs",
)

KEYSPACE_MODULE = "module"
KEYSPACE_PATH = "path"

_PARENT = "../"
_HERE = "./"


@dataclass(frozen=True)
class Candidate:
    package: str
    key: str
    keyspace: str

    def __str__(self) -> str:
        if self.keyspace == KEYSPACE_PATH:
            return f"{self.package}::{self.key}"
        return f"{self.package}:{self.key}"


def is_relative(identifier: str) -> bool:
    return identifier.startswith(".")


def base_segments(path: Optional[str]) -> List[str]:
    """Directory segments of a record path (file name dropped)."""
    if not path:
        return []
    return path.split(SEP)[:-1]


def relative_path(identifier: str, path: Optional[str]) -> str:
    """
    Join a relative identifier onto the directory of `path`.

    The leading run of "./" and "../" segments is consumed in order, so
    "./../d" and "../d" both climb one directory.
    """
    segments = base_segments(path)

    rest = identifier
    while rest.startswith(_HERE) or rest.startswith(_PARENT):
        if rest.startswith(_HERE):
            rest = rest[len(_HERE):]
            continue
        rest = rest[len(_PARENT):]
        if segments:
            segments.pop()

    segments.append(rest)
    return SEP.join(segments)


def relative_candidates(identifier: str, path: Optional[str]) -> List[str]:
    base = relative_path(identifier, path)
    return [base] + [base + suffix for suffix in PATH_SUFFIXES]


def package_candidates(identifier: str) -> List[Tuple[str, str]]:
    """
    (package, module) pairs for a bare specifier.

    "foo/bar/baz" -> ("foo/bar/baz", "."), ("foo/bar", "./baz"), ("foo", "./bar/baz")
    """
    out: List[Tuple[str, str]] = [(identifier, MAIN_MODULE)]

    pkg_parts = identifier.split(SEP)
    mod_parts = [MAIN_MODULE]
    while len(pkg_parts) > 1:
        mod_parts.insert(1, pkg_parts.pop())
        out.append((SEP.join(pkg_parts), SEP.join(mod_parts)))

    return out


def resolve_candidates(
    identifier: str,
    *,
    package: Optional[str] = None,
    path: Optional[str] = None,
) -> List[Candidate]:
    """
    Ordered lookup plan for `identifier`.

    Relative mode needs the caller's `package`; without one every identifier
    is treated as a bare package specifier.
    """
    if package is not None and is_relative(identifier):
        return [Candidate(package, p, KEYSPACE_PATH) for p in relative_candidates(identifier, path)]

    return [Candidate(pkg, mod, KEYSPACE_MODULE) for pkg, mod in package_candidates(identifier)]
