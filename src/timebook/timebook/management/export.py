from __future__ import annotations

import csv
import io

from .model import ManagementOverview

CSV_HEADER = ["Name", "Email", "Total-Min", "Billable-Min", "Expected-Min", "Overtime-Min"]


def build_overview_csv(overview: ManagementOverview) -> str:
    """One row per user summary, in the overview's per-user order."""

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for u in overview.per_user:
        writer.writerow(
            [
                u.name,
                u.email,
                u.total_minutes,
                u.billable_minutes,
                u.expected_minutes,
                u.overtime_minutes,
            ]
        )
    return out.getvalue()


def export_filename(overview: ManagementOverview) -> str:
    return f"management-export-{overview.range_start[:10]}-{overview.range_end[:10]}.csv"
