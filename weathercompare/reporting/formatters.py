"""Output formatters for comparison grids."""

import json

from weathercompare.reporting.grid import ComparisonGrid, GridCell

EMPTY_CELL = "—"
DEFAULT_ICON = "https://api.weather.gov/icons/land/day/sct?size=medium"


def _deg(value: int | None) -> str:
    return f"{value}°" if value is not None else "?"


def format_cell_text(cell: GridCell) -> str:
    if not cell.has_data:
        return EMPTY_CELL
    s = cell.summary
    text = (
        f"{_deg(s.high)}/{_deg(s.low)} "
        f"(Feels {_deg(s.real_feel_high)}/{_deg(s.real_feel_low)})"
    )
    if cell.alert is not None:
        text = f"! {text}"
    return text


def format_grid_text(grid: ComparisonGrid) -> str:
    """Plain text table, alerts listed under it."""
    if not grid.headers:
        return "No weather data available"

    header = ["Date", *grid.headers]
    body = [[row.label, *(format_cell_text(c) for c in row.cells)] for row in grid.rows]
    widths = [max(len(r[i]) for r in [header, *body]) for i in range(len(header))]

    lines = [
        "  ".join(col.ljust(w) for col, w in zip(header, widths)).rstrip(),
        "  ".join("-" * w for w in widths),
    ]
    for r in body:
        lines.append("  ".join(col.ljust(w) for col, w in zip(r, widths)).rstrip())

    notes = []
    for row in grid.rows:
        for name, cell in zip(grid.headers, row.cells):
            if cell.alert is not None:
                notes.append(
                    f"! {row.label} {name}: {cell.alert.label} ({cell.alert.detail_url})"
                )
    if notes:
        lines.append("")
        lines.extend(notes)
    return "\n".join(lines)


def grid_to_dict(grid: ComparisonGrid) -> dict:
    rows = []
    for row in grid.rows:
        cells = []
        for cell in row.cells:
            if not cell.has_data:
                cells.append(None)
                continue
            period = cell.period
            cells.append({
                **cell.summary.to_dict(),
                "icon": (period.icon if period else "") or DEFAULT_ICON,
                "shortForecast": period.short_forecast if period else "",
                "alert": (
                    {
                        "event": cell.alert.event,
                        "headline": cell.alert.label,
                        "severity": cell.alert.severity.value,
                        "url": cell.alert.detail_url,
                    }
                    if cell.alert is not None
                    else None
                ),
            })
        rows.append({"date": row.day, "label": row.label, "cells": cells})
    return {"today": grid.today, "locations": grid.headers, "rows": rows}


def format_grid_json(grid: ComparisonGrid) -> str:
    """JSON grid for programmatic consumption."""
    return json.dumps(grid_to_dict(grid), indent=2, ensure_ascii=False)
