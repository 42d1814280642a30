from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import List

import typer

from ..config import Settings
from ..crm import birthdays as crm_birthdays
from ..crm import finance, progress
from ..crm import instructors as crm_instructors
from ..crm.students import attendance_rate
from ..data.schedule import weekday_key
from ..models.assignment import ATTENDANCE_STATUSES
from ..render.csv_out import occupancy_csv, roster_csv, write_csv
from ..render.html_ui import write_html_ui
from ..scheduler.daily import DailyBoard, slot_counts, status_label, summarize_day
from ..scheduler.weekly import week_days, week_occupancy
from ..store.bootstrap import build_store, save_snapshot
from ..store.dashboard import DashboardStore
from ..validate.checks import validate_range
from ..validate.report import format_validation_report, write_validation_report

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path(__file__).resolve().parents[2]


def _setup_logging(project_root: Path, level: str = "INFO") -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "academy.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def _parse_date(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got {value!r}")


def _open_store(project_root: Path, settings: Settings) -> DashboardStore:
    _setup_logging(project_root, settings.log_level)
    store = build_store(project_root, settings)
    store.load_from_remote()
    return store


def _close_store(store: DashboardStore, project_root: Path, settings: Settings) -> None:
    if not store.writer.flush(10):
        logger.warning("Remote writes still pending on exit: %d", store.writer.pending)
    store.writer.close()
    path = save_snapshot(store, project_root, settings)
    logger.info("Snapshot saved to %s", path)


def format_daily(store: DashboardStore, d: date) -> str:
    assignments = store.get_assignments_for_date(d)
    attendance = store.get_attendance_for_date(d)
    names = {s.id: s.name for s in store.students}
    summary = summarize_day(assignments, attendance)
    lines: List[str] = [
        f"{store.template.label(weekday_key(d))} {d.isoformat()}: {summary.total_students} alunos, "
        f"{summary.checked_in} presentes, {summary.absent} faltas"
    ]
    slots = store.template.slots_for_date(d)
    if not slots:
        lines.append("Sem aulas neste dia.")
    for slot in slots:
        ids = assignments.get(slot.id, [])
        counts = slot_counts(ids, attendance, store.template.capacity)
        full = " LOTADO" if counts.is_full else ""
        lines.append(f"{slot.label} [{slot.id}] {counts.enrolled}/{store.template.capacity}{full}")
        for sid in ids:
            lines.append(f"  - {names.get(sid, sid)} ({sid}): {status_label(attendance.get(sid, 'none'))}")
    return "\n".join(lines)


def format_weekly(store: DashboardStore, d: date) -> str:
    lines: List[str] = []
    for day in week_occupancy(store, d):
        cells = ", ".join(
            f"{o.slot.time} {o.enrolled}/{o.capacity}{'*' if o.is_full else ''}" for o in day.slots
        )
        lines.append(f"{day.date.isoformat()} {store.template.label(day.weekday)}: {cells or '-'}")
    return "\n".join(lines)


app = typer.Typer(add_completion=False, help="Parkour academy roster and attendance")

RootOption = typer.Option(DEFAULT_ROOT, "--root", help="Project root holding data/")


@app.command("daily")
def cli_daily(
    on: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD), default today"),
    root: Path = RootOption,
) -> None:
    """Show the roster and attendance for one date."""
    settings = Settings.from_env()
    d = _parse_date(on)
    store = _open_store(root, settings)
    print(format_daily(store, d))


@app.command("weekly")
def cli_weekly(
    on: str | None = typer.Option(None, "--date", help="Any date in the week, default today"),
    root: Path = RootOption,
) -> None:
    """Show Monday-to-Sunday occupancy and write the HTML grid."""
    settings = Settings.from_env()
    d = _parse_date(on)
    store = _open_store(root, settings)
    print(format_weekly(store, d))
    path = write_html_ui(store, d, root / "outputs")
    print(f"HTML: {path}")


@app.command("move")
def cli_move(
    student_id: str = typer.Argument(..., help="Student to move"),
    target: str = typer.Argument(..., help="Target slot id, or a student id to drop onto"),
    on: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD), default today"),
    root: Path = RootOption,
) -> None:
    """Drag a student onto a slot (or onto another student) for one date."""
    settings = Settings.from_env()
    d = _parse_date(on)
    store = _open_store(root, settings)
    board = DailyBoard(store, d)
    if store.slot_of(d, student_id) is None:
        raise typer.BadParameter(f"{student_id} is not on the roster for {d.isoformat()}")
    if not board.drop(student_id, target):
        print(f"Move ignored: {student_id} -> {target}")
        raise typer.Exit(code=1)
    _close_store(store, root, settings)
    print(f"{student_id} -> {store.slot_of(d, student_id)} on {d.isoformat()}")


@app.command("attend")
def cli_attend(
    student_id: str = typer.Argument(...),
    status: str = typer.Argument(..., help="present, absent or late"),
    on: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD), default today"),
    root: Path = RootOption,
) -> None:
    """Record attendance for a student on a date."""
    settings = Settings.from_env()
    d = _parse_date(on)
    if status not in ATTENDANCE_STATUSES:
        raise typer.BadParameter(f"status must be one of {', '.join(ATTENDANCE_STATUSES)}")
    store = _open_store(root, settings)
    store.set_attendance(d, student_id, status)
    _close_store(store, root, settings)
    print(f"{student_id} on {d.isoformat()}: {status_label(status)}")


@app.command("validate")
def cli_validate(
    start: str | None = typer.Option(None, "--date", help="First date to check, default today"),
    days: int = typer.Option(7, help="Number of dates to check"),
    root: Path = RootOption,
) -> None:
    """Check rosters for over-capacity slots, duplicates and unknown ids."""
    settings = Settings.from_env()
    d = _parse_date(start)
    store = _open_store(root, settings)
    report = validate_range(store, d, days)
    write_validation_report(report, root / "outputs")
    print(format_validation_report(report))
    if report["violation_count"]:
        raise typer.Exit(code=1)


@app.command("export-csv")
def cli_export_csv(
    on: str | None = typer.Option(None, "--date", help="Date (YYYY-MM-DD), default today"),
    root: Path = RootOption,
) -> None:
    """Write the daily roster and weekly occupancy CSVs under outputs/."""
    settings = Settings.from_env()
    d = _parse_date(on)
    store = _open_store(root, settings)
    outputs_dir = root / "outputs"
    roster = roster_csv(store, d)
    write_csv(roster, outputs_dir, f"roster_{d.isoformat()}.csv")
    write_csv(occupancy_csv(store, d), outputs_dir, f"occupancy_{week_days(d)[0].isoformat()}.csv")
    print(roster)


@app.command("sync")
def cli_sync(root: Path = RootOption) -> None:
    """Load the full state from the remote store and save the local snapshot."""
    settings = Settings.from_env()
    store = _open_store(root, settings)
    if not store.remote.online:
        print("Offline: nothing to sync (set ACADEMY_DATABASE_URL)")
    _close_store(store, root, settings)
    print(
        f"{len(store.students)} students, {len(store.instructors)} instructors, "
        f"{len(store.daily_assignments)} roster dates"
    )


@app.command("payments")
def cli_payments(
    month: str | None = typer.Option(None, help="Month reference YYYY-MM, default current month"),
    status: str = typer.Option("all", help="all, paid, pending or overdue"),
    query: str = typer.Option("", help="Filter by student name"),
    root: Path = RootOption,
) -> None:
    """Monthly revenue summary and the payment list."""
    settings = Settings.from_env()
    month_ref = month or finance.current_month_ref()
    store = _open_store(root, settings)
    summary = finance.summarize(store.students, month_ref)
    print(
        f"{finance.format_month_year(month_ref)}: recebido R$ {summary.revenue_this_month:.2f}, "
        f"em aberto R$ {summary.total_pending_overdue:.2f}, "
        f"{summary.active_students} ativos, {summary.pct_paid}% pagos"
    )
    for row in finance.filter_payments(finance.all_payments(store.students), status, "", query):
        p = row.payment
        print(f"{p.date} {row.student.name} ({row.student.id}) {p.month_reference} {p.status} R$ {p.amount_paid:.2f}")


@app.command("pay")
def cli_pay(
    student_id: str = typer.Argument(...),
    amount: float = typer.Argument(..., help="Amount paid"),
    month: str | None = typer.Option(None, help="Month reference YYYY-MM, default current month"),
    method: str = typer.Option("Pix", help="Pix, Cartão or Dinheiro"),
    root: Path = RootOption,
) -> None:
    """Record a monthly fee payment for a student."""
    settings = Settings.from_env()
    store = _open_store(root, settings)
    student = store.find_student(student_id)
    if student is None:
        raise typer.BadParameter(f"Unknown student {student_id}")
    try:
        updated = finance.record_payment(student, month or finance.current_month_ref(), amount, method)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    store.update_student(updated)
    _close_store(store, root, settings)
    print(f"{updated.name}: {updated.payment_history[0].description} R$ {amount:.2f} ({method})")


@app.command("birthdays")
def cli_birthdays(
    month: int | None = typer.Option(None, min=1, max=12, help="Month number, default current month"),
    root: Path = RootOption,
) -> None:
    """Active students with a birthday in the month."""
    settings = Settings.from_env()
    month = month or date.today().month
    store = _open_store(root, settings)
    hits = crm_birthdays.birthdays_in_month(store.students, month)
    if not hits:
        print("Nenhum aniversariante.")
    for s in hits:
        birth = date.fromisoformat(s.birth_date)
        print(f"{birth.day:02d}/{birth.month:02d} {s.name} ({s.id}) faz {crm_birthdays.turning_age(s)} anos")


@app.command("progress")
def cli_progress(
    student_id: str = typer.Argument(...),
    root: Path = RootOption,
) -> None:
    """Skill checklist and attendance rate for one student."""
    settings = Settings.from_env()
    store = _open_store(root, settings)
    student = store.find_student(student_id)
    if student is None:
        raise typer.BadParameter(f"Unknown student {student_id}")
    print(
        f"{student.name}: {progress.skill_progress(student)}% das habilidades, "
        f"{attendance_rate(student)}% de presença"
    )
    for category, skills in progress.grouped_by_category(student).items():
        done = sum(1 for s in skills if s.is_mastered)
        print(f"  {category}: {done}/{len(skills)}")


@app.command("instructors")
def cli_instructors(root: Path = RootOption) -> None:
    """Weekly hours per instructor."""
    settings = Settings.from_env()
    store = _open_store(root, settings)
    for inst in store.instructors:
        hours = crm_instructors.hours_used(inst.assigned_slots)
        flag = " SOBRECARGA" if crm_instructors.is_overloaded(inst) else ""
        print(f"{inst.name} ({inst.role}): {hours}/{inst.max_hours}h{flag}")
    print(f"Total: {crm_instructors.total_assigned_hours(store.instructors)}h")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
