"""Shared Pydantic types and validators for graph models.

Identifiers are canonicalised on the way in so that a decorated id
(``node:abc``) and its bare form (``abc``) always name the same node.

``:`` separates the components of forward-adjacency field names
(``meta:<target>:<key>``), so it is rejected inside canonical ids and
metadata keys.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field

from ..keys import FIELD_SEPARATOR, decode_node_key

# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def canonical_node_id(v: Any) -> Any:
    """Strip a leading ``node:`` decoration from string ids.

    * ``"node:abc"`` → ``"abc"``
    * ``"abc"`` → ``"abc"``
    """
    if isinstance(v, str):
        return decode_node_key(v)
    return v


def reject_separator(v: str) -> str:
    if FIELD_SEPARATOR in v:
        raise ValueError(f"node id must not contain {FIELD_SEPARATOR!r}: {v!r}")
    return v


NodeId = Annotated[str, BeforeValidator(canonical_node_id), Field(min_length=1), AfterValidator(reject_separator)]
"""Non-empty node identifier in canonical (undecorated) form."""


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def normalize_metadata(v: Any) -> Any:
    """Accept ``None`` for an empty metadata map."""
    if v is None:
        return {}
    return v


def check_metadata_keys(v: dict[str, str]) -> dict[str, str]:
    bad = sorted(k for k in v if FIELD_SEPARATOR in k)
    if bad:
        raise ValueError(f"metadata keys must not contain {FIELD_SEPARATOR!r}: {bad}")
    return v


Metadata = Annotated[dict[str, str], BeforeValidator(normalize_metadata), AfterValidator(check_metadata_keys)]
"""Relation metadata: string keys to string values, ``None`` → ``{}``."""
