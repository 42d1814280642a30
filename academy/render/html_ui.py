from __future__ import annotations

from datetime import date
from html import escape
from pathlib import Path
from typing import List

from ..scheduler.weekly import DayOccupancy, week_occupancy
from ..store.dashboard import DashboardStore


AGE_GROUP_COLORS = {
    "4-6 anos": "#e6fff2",
    "7-12 anos": "#e6f2ff",
    "Teens/Adultos": "#eee6ff",
    "Adultos": "#e6fbff",
}


def build_html(store: DashboardStore, d: date) -> str:
    days: List[DayOccupancy] = week_occupancy(store, d)
    names = {s.id: s.name for s in store.students}
    today = date.today()

    def slot_html(day: DayOccupancy, idx: int) -> str:
        occ = day.slots[idx]
        bg = AGE_GROUP_COLORS.get(occ.slot.age_group, "#fafafa")
        ids = store.get_assignments_for_date(day.date).get(occ.slot.id, [])
        roster = "".join(f"<li>{escape(names.get(sid, sid))}</li>" for sid in ids)
        full = " <span class='full'>LOTADO</span>" if occ.is_full else ""
        return (
            f"<div class='slot' style='background:{bg}'>"
            f"<div class='head'><strong>{occ.slot.time}</strong> {escape(occ.slot.age_group)}</div>"
            f"<div class='count'>{occ.enrolled}/{occ.capacity}{full}</div>"
            f"<ul>{roster}</ul>"
            f"</div>"
        )

    columns = []
    for day in days:
        cls = "day today" if day.date == today else "day"
        body = "".join(slot_html(day, i) for i in range(len(day.slots))) or "<p class='empty'>Sem aulas</p>"
        columns.append(
            f"<section class='{cls}'>"
            f"<h2>{escape(store.template.label(day.weekday))} <span class='date'>{day.date.strftime('%d/%m')}</span></h2>"
            f"{body}"
            f"</section>"
        )

    legend_items = "".join(
        f"<div class='legend-item'><span class='swatch' style='background:{clr}'></span>{escape(group)}</div>"
        for group, clr in AGE_GROUP_COLORS.items()
    )

    style = """
    <style>
    body { font-family: system-ui, Arial, sans-serif; margin: 20px; color: #222; }
    .legend { display:flex; gap:12px; flex-wrap:wrap; margin: 8px 0 20px; }
    .legend-item { display:flex; align-items:center; gap:6px; font-size: 13px; }
    .legend .swatch { width:16px; height:16px; display:inline-block; border:1px solid #ccc; }
    .week { display:grid; grid-template-columns: repeat(7, 1fr); gap: 8px; }
    .day { border: 1px solid #ddd; border-radius: 8px; padding: 6px; }
    .day.today { border-color: #3b82f6; }
    .day h2 { font-size: 14px; margin: 4px 0 8px; }
    .date { color:#666; font-weight: normal; }
    .slot { border: 1px solid #e5e5e5; border-radius: 6px; padding: 4px 6px; margin-bottom: 6px; font-size: 12px; }
    .slot ul { margin: 4px 0 0 16px; padding: 0; }
    .count { color:#444; }
    .full { color:#b91c1c; font-weight: 700; }
    .empty { color:#999; font-size: 12px; }
    </style>
    """

    title = f"Semana de {days[0].date.strftime('%d/%m/%Y')}"
    return (
        "<html><head><meta charset='utf-8'><title>Ocupação semanal</title>" + style + "</head><body>"
        f"<h1>{title}</h1>"
        f"<div class='legend'><strong>Turmas:</strong> {legend_items}</div>"
        f"<div class='week'>{''.join(columns)}</div>"
        "</body></html>"
    )


def write_html_ui(store: DashboardStore, d: date, outputs_dir: Path) -> Path:
    ui_dir = outputs_dir / "ui"
    ui_dir.mkdir(parents=True, exist_ok=True)
    out_path = ui_dir / "index.html"
    out_path.write_text(build_html(store, d), encoding="utf-8")
    return out_path
