"""Cache key derivation."""

from __future__ import annotations

from sveltedocs.errors import ErrorCode, SvelteDocsError
from sveltedocs.models.tools import LookupKind


def parse_kind(kind: LookupKind | str) -> LookupKind:
    """Coerce *kind* to a LookupKind. Unknown kinds are a programmer error."""
    try:
        return LookupKind(kind)
    except ValueError:
        raise SvelteDocsError(
            code=ErrorCode.UNKNOWN_LOOKUP_KIND,
            message=f"Unknown lookup kind: {kind!r}",
        ) from None


def build_key(kind: LookupKind | str, name: str) -> str:
    """Return the cache key for a lookup, e.g. ``"component:button"``.

    The kind prefix keeps a component and a doc page with the same name apart.
    Names are used verbatim, so keys are case-sensitive.
    """
    return f"{parse_kind(kind).value}:{name}"
