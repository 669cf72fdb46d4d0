"""Detect platform-specific native binary packages by name.

Tools that ship native binaries on npm (esbuild, swc, rollup, oxlint, ...)
publish one package per OS/CPU combination, e.g. ``esbuild-linux-x64`` or
``@swc/core-win32-x64-msvc``. Listings usually want to hide these or fold
them under their parent package. Detection works on the raw name: an OS
token must be immediately followed by an architecture token, optionally
trailed by an ABI token.

OS and architecture words also show up in ordinary names (``linux-tips``,
``arm-controller``), so the check is deliberately conservative: a single
unrecognized token after the architecture rejects the match.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from lookalike.names import split_scope

# Values of Node's ``process.platform``.
OS: frozenset[str] = frozenset(
    {
        "aix",
        "android",
        "cygwin",
        "darwin",
        "freebsd",
        "haiku",
        "linux",
        "netbsd",
        "openbsd",
        "sunos",
        "win32",
    }
)

# Values of Node's ``process.arch``.
ARCH: frozenset[str] = frozenset(
    {
        "arm",
        "arm64",
        "ia32",
        "loong64",
        "mips",
        "mipsel",
        "mips64el",
        "ppc",
        "ppc64",
        "ppc64le",
        "riscv64",
        "s390",
        "s390x",
        "x64",
    }
)

# libc / toolchain suffixes used by Rust- and Go-built npm binaries.
ABI: frozenset[str] = frozenset(
    {
        "android",
        "androideabi",
        "eabi",
        "eabihf",
        "gnu",
        "gnueabihf",
        "msvc",
        "musl",
        "musleabihf",
    }
)


@dataclass(frozen=True)
class PlatformTarget:
    """The platform tokens found in a package name."""

    base: str  # name with the platform part removed, e.g. "@swc/core"
    os: str
    arch: str
    abi: str | None = None


def _join_base(scope: str | None, head: list[str]) -> str:
    bare = "-".join(head)
    if scope is None:
        return bare
    if not bare:
        return scope
    return f"{scope}/{bare}"


def parse_platform_target(name: str) -> PlatformTarget | None:
    """Return the OS/architecture encoded in *name*, or ``None``.

    Only the first adjacent ``<os>-<arch>`` pair is considered. After the
    pair:

    * nothing more: platform-specific;
    * exactly one token: platform-specific only if it is a known ABI;
    * two or more tokens: platform-specific (descriptive suffixes).

    Args:
        name: A raw package name, optionally scoped.

    Returns:
        A :class:`PlatformTarget`, or ``None`` if the name is not
        platform-specific.
    """
    scope, bare = split_scope(name)
    if not bare:
        return None

    parts = bare.split("-")
    if len(parts) < 2:
        return None

    for i in range(len(parts) - 1):
        if parts[i] in OS and parts[i + 1] in ARCH:
            break
    else:
        return None

    trailing = parts[i + 2 :]
    abi: str | None = None
    if len(trailing) == 1:
        if trailing[0] not in ABI:
            return None
        abi = trailing[0]

    return PlatformTarget(
        base=_join_base(scope, parts[:i]),
        os=parts[i],
        arch=parts[i + 1],
        abi=abi,
    )


def is_platform_specific_package(name: str) -> bool:
    """Return True if *name* looks like a per-platform binary package."""
    return parse_platform_target(name) is not None


def filter_platform_packages(names: Iterable[str]) -> list[str]:
    """Drop platform-specific names, keeping the order of the rest."""
    return [n for n in names if not is_platform_specific_package(n)]


def group_platform_packages(names: Iterable[str]) -> dict[str, list[str]]:
    """Group platform-specific names by the package they belong to.

    ``["@swc/core-linux-x64-gnu", "@swc/core-darwin-arm64", "react"]``
    becomes ``{"@swc/core": ["@swc/core-linux-x64-gnu",
    "@swc/core-darwin-arm64"]}``. Names that are not platform-specific are
    left out. Groups and their members keep input order.
    """
    groups: dict[str, list[str]] = {}
    for name in names:
        target = parse_platform_target(name)
        if target is None:
            continue
        groups.setdefault(target.base, []).append(name)
    return groups
