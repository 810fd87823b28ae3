"""
Small SQL-building helpers.

Column identifiers always come from a fixed, module-level mapping owned by
the repository; caller-supplied names are only used as lookup keys.
"""

from __future__ import annotations

from typing import Any, Mapping


def build_set_clause(
    fields: Mapping[str, Any],
    columns: Mapping[str, str],
    *,
    start: int = 1,
) -> tuple[str, list[Any]]:
    """
    Build `col = $n, ...` for the fields that are present.

    `fields` is the partial payload (only keys the client sent).
    `columns` maps payload keys to SQL column names.
    `start` is the first placeholder number to use.

    Returns ("", []) when nothing is present.
    """
    unknown = set(fields) - set(columns)
    if unknown:
        raise ValueError(f"Unknown update fields: {sorted(unknown)}")

    assignments: list[str] = []
    args: list[Any] = []
    # Iterate the column map (not the payload) so the clause order is stable.
    for key, column in columns.items():
        if key not in fields:
            continue
        args.append(fields[key])
        assignments.append(f"{column} = ${start + len(args) - 1}")
    return ", ".join(assignments), args
