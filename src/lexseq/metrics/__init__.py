"""Prometheus metrics for lexseq."""

from __future__ import annotations

from prometheus_client import Counter

# ID generation
IDS_ISSUED = Counter("lexseq_ids_issued_total", "Total IDs issued", ["prefix"])

# Rejected ID strings whose suffix did not decode to a sequence member
MEMBERSHIP_REJECTIONS = Counter(
    "lexseq_membership_rejections_total",
    "ID strings rejected because they are not sequence members",
)

__all__ = [
    "IDS_ISSUED",
    "MEMBERSHIP_REJECTIONS",
]
