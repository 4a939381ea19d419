import typer
from rich.console import Console
from rich.table import Table
from rich.markup import escape
from typing import Optional, List
from datetime import datetime

from activity_planner.clock import current_moment
from activity_planner.database import SessionLocal, init_db
from activity_planner.crud import (
    create_category, get_categories,
    create_context, get_contexts, get_active_contexts,
    create_activity, get_activities, get_activity, update_activity,
    complete_activity, get_suggestions
)
from activity_planner.errors import PlannerError
from activity_planner.schemas import (
    ActivityCreate, ActivityUpdate, CategoryCreate, ContextCreate, TimeOfDay, TimeSlotCreate
)
from activity_planner.suggestions import activities_by_time_of_day
from activity_planner.time_windows import weekday_code, time_code

app = typer.Typer(help="Activity Planner CLI - what should I do right now?")
console = Console()


def _parse_moment(at: Optional[str]) -> datetime:
    """Parse --at, falling back to the wall clock"""
    if not at:
        return current_moment()
    try:
        return datetime.strptime(at, "%Y-%m-%d %H:%M")
    except ValueError:
        raise typer.BadParameter(f"expected 'YYYY-MM-DD HH:MM', got {at!r}", param_hint="--at")


def _split(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _window_str(days, time_start, time_end) -> str:
    days_str = ", ".join(days) if days else "Every day"
    hours_str = f"{time_start}-{time_end}" if time_start and time_end else "All day"
    return f"{days_str} · {hours_str}"


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")


@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    import activity_planner.models  # noqa: F401
    from activity_planner.database import engine, Base
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")


@app.command()
def add_category(
    name: str = typer.Option(..., prompt="Category name"),
    color: str = typer.Option("#6b7280", help="Badge color (hex)"),
    icon: Optional[str] = typer.Option(None, help="Optional icon")
):
    """Create a category"""
    db = SessionLocal()
    try:
        category = create_category(db, CategoryCreate(name=name, color=color, icon=icon))
        console.print(f"[green]✓[/green] Category created! ID: {category.id}")
    except PlannerError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
    finally:
        db.close()


@app.command()
def list_categories():
    """List categories"""
    db = SessionLocal()
    try:
        categories = get_categories(db)
        if not categories:
            console.print("[yellow]No categories found[/yellow]")
            return
        for category in categories:
            icon = f" {category.icon}" if category.icon else ""
            console.print(f"  {category.id}. {category.name}{icon} [dim]({category.color})[/dim]")
    finally:
        db.close()


@app.command()
def add_context(
    name: str = typer.Option(..., prompt="Internal name (e.g. work_hours)"),
    label: str = typer.Option(..., prompt="Display label (e.g. Horario laboral)"),
    days: Optional[str] = typer.Option(None, help="Days (comma-separated, e.g. Mon,Tue,Wed). Default: every day"),
    start: Optional[str] = typer.Option(None, help="Start time HH:MM. Default: all day"),
    end: Optional[str] = typer.Option(None, help="End time HH:MM (earlier than start crosses midnight)")
):
    """Create a context (named recurring time window)"""
    db = SessionLocal()
    try:
        context = create_context(db, ContextCreate(
            name=name,
            label=label,
            days=_split(days),
            time_start=start,
            time_end=end
        ))
        console.print(f"[green]✓[/green] Context created! ID: {context.id}")
        console.print(f"  {context.label}: {_window_str(context.days, context.time_start, context.time_end)}")
    except PlannerError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid input: {escape(str(e))}")
    finally:
        db.close()


@app.command()
def list_contexts(
    active: bool = typer.Option(False, "--active", help="Only contexts active now"),
    at: Optional[str] = typer.Option(None, help="Moment to evaluate (YYYY-MM-DD HH:MM)")
):
    """List contexts"""
    db = SessionLocal()
    try:
        contexts = get_active_contexts(db, _parse_moment(at)) if active else get_contexts(db)
        if not contexts:
            console.print("[yellow]No contexts found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Name", style="green")
        table.add_column("Label", style="yellow")
        table.add_column("Window", style="blue")

        for context in contexts:
            table.add_row(
                str(context.id),
                context.name,
                context.label,
                _window_str(context.days, context.time_start, context.time_end)
            )

        console.print(table)
    finally:
        db.close()


@app.command()
def add_activity(
    title: str = typer.Option(..., prompt="Title"),
    priority: str = typer.Option("someday", help="urgent, important or someday"),
    energy: Optional[str] = typer.Option(None, help="low, medium or high"),
    category_id: Optional[int] = typer.Option(None, help="Category ID"),
    contexts: Optional[str] = typer.Option(None, help="Context IDs (comma-separated)"),
    duration: Optional[int] = typer.Option(None, help="Duration in minutes"),
    recurrence: Optional[str] = typer.Option(None, help="daily, weekly or monthly (makes it recurring)"),
    description: Optional[str] = typer.Option(None, help="Optional description")
):
    """Create an activity"""
    db = SessionLocal()
    try:
        context_ids = [int(cid) for cid in _split(contexts) or []]
        activity = create_activity(db, ActivityCreate(
            title=title,
            description=description,
            category_id=category_id,
            duration_minutes=duration,
            energy_level=energy,
            priority=priority,
            is_recurring=recurrence is not None,
            recurrence_type=recurrence,
            contexts=context_ids
        ))
        console.print(f"[green]✓[/green] Activity created! ID: {activity.id}")
        if not activity.contexts and not activity.time_slots:
            console.print("[yellow]  No contexts or time slots yet - it won't be suggested until it has one.[/yellow]")
    except PlannerError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid input: {escape(str(e))}")
    finally:
        db.close()


@app.command()
def add_slot(
    activity_id: int = typer.Option(..., prompt="Activity ID"),
    start: str = typer.Option(..., prompt="Start time HH:MM"),
    end: str = typer.Option(..., prompt="End time HH:MM"),
    day: Optional[str] = typer.Option(None, help="Day (e.g. Mon). Default: every day")
):
    """Add a time slot to an activity"""
    db = SessionLocal()
    try:
        activity = get_activity(db, activity_id)
        if not activity:
            console.print(f"[red]✗[/red] Activity ID {activity_id} not found")
            return

        slots = [
            TimeSlotCreate(day_of_week=s.day_of_week, time_start=s.time_start, time_end=s.time_end)
            for s in activity.time_slots
        ]
        slots.append(TimeSlotCreate(day_of_week=day, time_start=start, time_end=end))
        update_activity(db, activity_id, ActivityUpdate(time_slots=slots))
        console.print(f"[green]✓[/green] Time slot added: {_window_str([day] if day else None, start, end)}")
    except PlannerError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid input: {escape(str(e))}")
    finally:
        db.close()


@app.command()
def list_activities(
    category_id: Optional[int] = typer.Option(None, help="Filter by category ID"),
    show_completed: bool = typer.Option(False, "--all", help="Include completed activities"),
    time_of_day: Optional[TimeOfDay] = typer.Option(None, "--time-of-day", help="Only open activities scheduled in this part of the day")
):
    """List activities"""
    db = SessionLocal()
    try:
        activities = get_activities(db, category_id=category_id)
        if time_of_day:
            activities = activities_by_time_of_day(activities, time_of_day)
        elif not show_completed:
            activities = [a for a in activities if not a.is_completed]

        if not activities:
            console.print("[yellow]No activities found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Priority", style="red")
        table.add_column("Energy", style="yellow")
        table.add_column("Schedule", style="blue")
        table.add_column("Done", justify="right")

        for activity in activities:
            schedule = [c.label for c in activity.contexts]
            schedule += [_window_str([s.day_of_week] if s.day_of_week else None, s.time_start, s.time_end)
                         for s in activity.time_slots]
            table.add_row(
                str(activity.id),
                activity.title[:50],
                activity.priority,
                activity.energy_level or "-",
                "\n".join(schedule) or "[dim]unscheduled[/dim]",
                str(activity.completions_count)
            )

        console.print(table)
    finally:
        db.close()


@app.command()
def complete(
    activity_id: int = typer.Option(..., prompt="Activity ID"),
    notes: Optional[str] = typer.Option(None, help="Optional notes")
):
    """Record that an activity was done"""
    db = SessionLocal()
    try:
        completion = complete_activity(db, activity_id, notes=notes)
        console.print(f"[green]✓[/green] Completed at {completion.completed_at.strftime('%Y-%m-%d %H:%M')}")
    except PlannerError as e:
        console.print(f"[red]✗[/red] {escape(str(e))}")
    finally:
        db.close()


@app.command()
def suggest(
    limit: int = typer.Option(10, help="Maximum number of suggestions"),
    category_id: Optional[int] = typer.Option(None, "--category", help="Only this category"),
    at: Optional[str] = typer.Option(None, help="Moment to evaluate (YYYY-MM-DD HH:MM). Default: now")
):
    """Suggest what to do right now"""
    db = SessionLocal()
    try:
        now = _parse_moment(at)
        results = get_suggestions(db, now, limit=limit, category_id=category_id)

        console.print(f"\n[bold]Suggestions for {weekday_code(now)} {time_code(now)}[/bold]\n")
        if not results:
            console.print("[yellow]Nothing scheduled for right now.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Activity", style="green")
        table.add_column("Score", style="cyan", justify="right")
        table.add_column("Why", style="yellow")

        for i, result in enumerate(results, 1):
            table.add_row(str(i), result.activity.title, str(result.score), result.reason)

        console.print(table)
    finally:
        db.close()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Reload on code changes")
):
    """Run the HTTP API"""
    import uvicorn
    uvicorn.run("activity_planner.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
