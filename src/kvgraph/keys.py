"""
Storage key codec for the key-value graph layout.

Maps logical node identifiers onto the three key families the graph uses
and names the fields inside a forward-adjacency hash.

Key families:
    node:<id>        - Serialized node payload (scalar)
    childrenOf:<id>  - Forward adjacency (hash), one entry per outgoing edge
    parentOf:<id>    - Backward adjacency (set of host ids)

Forward-adjacency hash fields:
    target:<tid>          = <tid>         marks the edge <id> -> <tid>
    meta:<tid>:<metaKey>  = <metaValue>   metadata for that edge

Field names are split at the first ``:`` after ``meta:``, so target ids
and metadata keys written through the models never contain ``:``.

All functions are pure and total on every string. Encoders are idempotent:
encoding an already-encoded key returns it unchanged.
"""

NODE_PREFIX = "node:"
FORWARD_PREFIX = "childrenOf:"
BACKWARD_PREFIX = "parentOf:"

TARGET_FIELD_PREFIX = "target:"
META_FIELD_PREFIX = "meta:"
FIELD_SEPARATOR = ":"


def _ensure_prefix(prefix: str, value: str) -> str:
    if value.startswith(prefix):
        return value
    return f"{prefix}{value}"


def encode_node_key(node_id: str) -> str:
    """Return the value key for a node id (``node:<id>``)."""
    return _ensure_prefix(NODE_PREFIX, node_id)


def decode_node_key(key: str) -> str:
    """Return the canonical node id for a value key, or the input unchanged."""
    if key.startswith(NODE_PREFIX):
        return key[len(NODE_PREFIX) :]
    return key


def encode_forward_key(node_id: str) -> str:
    """Return the forward-adjacency hash key (``childrenOf:<id>``)."""
    return _ensure_prefix(FORWARD_PREFIX, node_id)


def encode_backward_key(node_id: str) -> str:
    """Return the backward-adjacency set key (``parentOf:<id>``)."""
    return _ensure_prefix(BACKWARD_PREFIX, node_id)


# ── Forward-adjacency fields ────────────────────────────────────────


def target_field(target_id: str) -> str:
    return f"{TARGET_FIELD_PREFIX}{target_id}"


def meta_prefix(target_id: str) -> str:
    return f"{META_FIELD_PREFIX}{target_id}{FIELD_SEPARATOR}"


def meta_field(target_id: str, meta_key: str) -> str:
    return f"{meta_prefix(target_id)}{meta_key}"


def _declared_targets(fields: dict[str, str]) -> set[str]:
    return {name[len(TARGET_FIELD_PREFIX) :] for name in fields if name.startswith(TARGET_FIELD_PREFIX)}


def _split_meta_field(name: str) -> tuple[str, str] | None:
    """Resolve a ``meta:`` field to its (target, metaKey) pair, or None if malformed."""
    target, sep, meta_key = name[len(META_FIELD_PREFIX) :].partition(FIELD_SEPARATOR)
    if not sep or not target:
        return None
    return target, meta_key


def decode_forward_fields(fields: dict[str, str]) -> dict[str, dict[str, str]]:
    """
    Group a forward-adjacency hash into ``{target: {metaKey: metaValue}}``.

    Every declared target appears even when it has no metadata. Metadata
    without a matching ``target:`` marker is still grouped under its target
    so that partially written edges remain visible.
    """
    grouped: dict[str, dict[str, str]] = {target: {} for target in _declared_targets(fields)}

    for name, value in fields.items():
        if not name.startswith(META_FIELD_PREFIX):
            continue
        split = _split_meta_field(name)
        if split is None:
            continue
        target, meta_key = split
        grouped.setdefault(target, {})[meta_key] = value

    return grouped


def fields_owned_by(fields: dict[str, str], target_id: str) -> list[str]:
    """Return every field in a forward-adjacency hash that belongs to ``target_id``."""
    owned = []
    for name in fields:
        if name == target_field(target_id):
            owned.append(name)
        elif name.startswith(META_FIELD_PREFIX):
            split = _split_meta_field(name)
            if split is not None and split[0] == target_id:
                owned.append(name)
    return owned
