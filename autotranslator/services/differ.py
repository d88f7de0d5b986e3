from __future__ import annotations

from typing import Any

from autotranslator.schemas.tree import LocalizationTree, NodeKind, node_kind


def find_missing_keys(source: LocalizationTree, target: Any) -> LocalizationTree:
    """Return the part of `source` whose keys are absent or null in `target`.

    Only existence is compared: a key holding any non-null value in the target
    is never reported, even if the source text changed. Leaves (including
    lists) are copied whole. Keys that only exist in the target are ignored.
    """
    existing = target if isinstance(target, dict) else {}
    missing: LocalizationTree = {}

    for key, source_value in source.items():
        target_value = existing.get(key)
        if node_kind(source_value) is NodeKind.SUBTREE:
            nested_missing = find_missing_keys(source_value, target_value)
            if nested_missing:
                missing[key] = nested_missing
        elif target_value is None:
            missing[key] = source_value

    return missing


def count_leaves(tree: LocalizationTree) -> int:
    total = 0
    for value in tree.values():
        if node_kind(value) is NodeKind.SUBTREE:
            total += count_leaves(value)
        else:
            total += 1
    return total
