"""Package name normalization and scope handling.

npm package names come in many surface spellings that refer to the same
thing: ``my-package``, ``my_package``, ``My.Package``, ``@org/my-package``
and ``my-package-js`` all look like one project to a human reader. This
module reduces a name to a canonical *normalized key* used for identity
comparison, and provides the small scope helpers shared with the registry
client and the platform classifier.
"""

from __future__ import annotations

# Characters deleted outright during normalization.
_SEPARATORS = str.maketrans("", "", "-_.")

# Ecosystem noise that is commonly glued onto a name ("jslint", "foo-node").
# Prefixes are tried before suffixes.
NOISE_AFFIXES: tuple[str, ...] = ("js", "node")


def split_scope(name: str) -> tuple[str | None, str]:
    """Split a package name into ``(scope, bare_name)``.

    ``"@babel/core"`` becomes ``("@babel", "core")``; an unscoped name
    comes back as ``(None, name)``. Everything up to the *last* ``/`` is
    treated as the scope.
    """
    scope, sep, bare = name.rpartition("/")
    if not sep:
        return None, name
    return scope, bare


def strip_scope(name: str) -> str:
    """Return *name* without its ``@scope/`` prefix."""
    return split_scope(name)[1]


def encode_package_path(name: str) -> str:
    """Encode a package name for use as a registry URL path segment.

    The registry expects the scope separator percent-encoded
    (``@scope/name`` -> ``@scope%2Fname``); the ``@`` stays literal.
    """
    return name.replace("/", "%2F")


def _strip_noise_affix(key: str) -> str:
    for affix in NOISE_AFFIXES:
        if key.startswith(affix) and len(key) > len(affix):
            return key[len(affix) :]
    for affix in NOISE_AFFIXES:
        if key.endswith(affix) and len(key) > len(affix):
            return key[: -len(affix)]
    return key


def normalize_package_name(name: str) -> str:
    """Reduce a package name to its normalized identity key.

    The scope is dropped, the name is lowercased, every ``-``, ``_`` and
    ``.`` is deleted, and one leading or trailing noise affix (``js``,
    ``node``) is removed as long as something is left over::

        >>> normalize_package_name("@scope/My-Package")
        'mypackage'
        >>> normalize_package_name("foo-node")
        'foo'
        >>> normalize_package_name("js")
        'js'

    Stripping an affix can expose another one (``nodejsfoo`` -> ``jsfoo``),
    so the strip is repeated until the key no longer changes. This keeps
    the function idempotent, at the cost of the "at most one strip" rule:
    ``js-foo-node`` gives ``foo``, not ``foonode``.
    """
    key = strip_scope(name).lower().translate(_SEPARATORS)
    while True:
        stripped = _strip_noise_affix(key)
        if stripped == key:
            return key
        key = stripped
