"""Reshape flat aggregation rows into nested report structures.

Group keys keep the order in which they are first seen, so any ordering
applied by the producing query carries through.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

# Keys every pivot entry carries besides the per-model counts
PIVOT_RESERVED_KEYS = frozenset({"institutionName", "total"})


def pivot_model_counts(
    rows: Iterable[Mapping[str, Any]],
) -> tuple[list[str], list[dict[str, Any]]]:
    """Turn (institution, model, count) rows into one entry per institution.

    Each entry carries ``institutionName``, a running ``total`` and one key per
    model name holding its count. Also returns the distinct model names.
    A model named like a reserved key still adds to ``total`` but gets no
    column of its own.
    """
    institutions: dict[str, dict[str, Any]] = {}
    models: dict[str, None] = {}

    for row in rows:
        institution_name = row["institution_name"]
        model_name = row["model_name"]
        count = int(row["count"])

        models.setdefault(model_name, None)
        entry = institutions.get(institution_name)
        if entry is None:
            entry = {"institutionName": institution_name, "total": 0}
            institutions[institution_name] = entry

        if model_name not in PIVOT_RESERVED_KEYS:
            entry[model_name] = count
        entry["total"] += count

    return list(models), list(institutions.values())


def group_services_by_institution(
    rows: Iterable[Mapping[str, Any]],
    service_fields: Sequence[str],
) -> list[dict[str, Any]]:
    """Nest (institution, service) rows under their institution.

    ``service_fields`` names the per-service metrics copied into each service
    entry alongside ``service_id`` and ``service_name``.
    """
    institutions: dict[int, dict[str, Any]] = {}

    for row in rows:
        institution_id = row["institution_id"]
        group = institutions.get(institution_id)
        if group is None:
            group = {
                "institution_id": institution_id,
                "institution_name": row["institution_name"],
                "services": [],
            }
            institutions[institution_id] = group

        service = {"service_id": row["service_id"], "service_name": row["service_name"]}
        for field in service_fields:
            service[field] = row[field]
        group["services"].append(service)

    return list(institutions.values())
