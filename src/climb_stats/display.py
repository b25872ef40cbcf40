"""Rich terminal display for climb-stats."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

_OUTCOME_COLORS: dict[str, str] = {
    "Flash": "gold1",
    "Send": "green",
    "Project": "deep_sky_blue1",
    "Attempt": "grey70",
}

_ROUTE_TYPE_COLORS: dict[str, str] = {
    "Boulder": "dark_orange3",
    "Top Rope": "deep_sky_blue1",
    "Lead": "red1",
    "Auto Belay": "purple",
}


def _bar(current: int, total: int, width: int = 20) -> str:
    """Render a progress bar as text: [████████░░░░░░░░░░░░]."""
    if total <= 0:
        return "[" + "░" * width + "]"
    ratio = min(current / total, 1.0)
    filled = int(ratio * width)
    empty = width - filled
    return "[" + "█" * filled + "░" * empty + "]"


def _week_dots(streak: int) -> str:
    """Seven dots, one filled per day climbed this week."""
    streak = max(0, min(streak, 7))
    return "●" * streak + "○" * (7 - streak)


def print_dashboard(data: dict) -> None:
    """Print the main dashboard with this week's streak and today's climbs."""
    streak = data.get("current_streak", 0)
    today = data.get("today", {})
    week_start, week_end = data.get("week_range", ("", ""))

    lines: list[str] = []
    lines.append("")
    lines.append(f"  [bold]Hi {data.get('first_name', 'climber')}![/]")
    lines.append("")
    flame = "\U0001f525" if streak >= 1 else "❄️ "
    lines.append(f"  {flame} Weekly streak: [bold]{streak}[/] day{'s' if streak != 1 else ''}")
    lines.append(f"  {_week_dots(streak)}  ({week_start} to {week_end})")
    lines.append("")
    lines.append("  [bold]Today:[/]")
    lines.append(
        f"  Climbs: {today.get('climbs', 0)}  |  "
        f"[gold1]Flashes: {today.get('flashes', 0)}[/]  |  "
        f"[green]Sends: {today.get('sends', 0)}[/]  |  "
        f"[deep_sky_blue1]Projects: {today.get('projects', 0)}[/]"
    )
    lines.append("")
    lines.append(f"  Total climbs logged: {data.get('total_climbs', 0)}")
    lines.append("")

    panel = Panel(
        "\n".join(lines),
        title="[bold]CLIMB STATS[/]",
        box=box.ROUNDED,
        border_style="dark_orange3",
        width=60,
    )
    console.print(panel)


def print_climbs(climbs: list[dict]) -> None:
    """Print climbs as a table, in the order given."""
    table = Table(
        title="Climb Log",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("ID", justify="right")
    table.add_column("Date", width=10)
    table.add_column("Gym")
    table.add_column("Type")
    table.add_column("Grade", justify="center")
    table.add_column("Outcome")
    table.add_column("Notes")

    for climb in climbs:
        outcome = climb.get("outcome", "")
        route_type = climb.get("route_type", "")
        outcome_color = _OUTCOME_COLORS.get(outcome, "white")
        type_color = _ROUTE_TYPE_COLORS.get(route_type, "white")
        table.add_row(
            str(climb.get("id", "")),
            climb.get("climb_date", ""),
            climb.get("gym", ""),
            f"[{type_color}]{route_type}[/]",
            f"[bold]{climb.get('grade', '')}[/]",
            f"[{outcome_color}]{outcome}[/]",
            climb.get("notes") or "",
        )

    console.print(table)


def print_monthly(data: dict) -> None:
    """Print a month's summary.

    data is MonthlySummary.to_dict() plus 'year' and 'month_name'.
    """
    title = f"[bold]{data.get('month_name', '')} {data.get('year', '')}[/]"
    total = data.get("totalClimbs", 0)

    lines: list[str] = []
    lines.append("")
    if total == 0:
        lines.append("  No climbs logged this month.")
        lines.append("")
    else:
        lines.append(f"  Total Climbs:  [bold]{total}[/]")
        lines.append(f"  Max Grade:     [bold]{data.get('maxGrade', '')}[/]")
        success_rate = data.get("successRate", 0)
        lines.append(f"  Success Rate:  {_bar(success_rate, 100, width=15)} {success_rate}%")

        breakdown = data.get("routeTypeBreakdown", [])
        if breakdown:
            lines.append("")
            lines.append("  [bold]Route Types:[/]")
            for share in breakdown:
                route_type = share["routeType"]
                color = _ROUTE_TYPE_COLORS.get(route_type, "white")
                bar = _bar(share["percentage"], 100, width=15)
                lines.append(
                    f"  [{color}]{route_type:<11s}[/] {bar} {share['percentage']:>3d}% ({share['count']})"
                )
        lines.append("")

    panel = Panel(
        "\n".join(lines),
        title=title,
        box=box.ROUNDED,
        border_style="cyan",
        width=60,
    )
    console.print(panel)


def print_available_months(months: list[dict]) -> None:
    """Print the months that have climbs, most recent first."""
    if not months:
        print_no_data_message()
        return
    table = Table(title="Months With Climbs", box=box.ROUNDED, header_style="bold")
    table.add_column("Month")
    table.add_column("Year", justify="right")
    for m in months:
        table.add_row(m["monthName"], str(m["year"]))
    console.print(table)


def print_grade_progression(points: list[dict], grade_scale: list[str]) -> None:
    """Print one bar per month, length proportional to the month's max grade."""
    if not points:
        print_no_data_message()
        return
    top = len(grade_scale)
    lines: list[str] = []
    lines.append("")
    for p in points:
        label = f"{p['month']} {p['year']}"
        bar = _bar(p["gradeValue"], top, width=20)
        lines.append(f"  {label:<9s} {bar} [bold]{p['maxGrade']}[/]")
    lines.append("")

    panel = Panel(
        "\n".join(lines),
        title="[bold]Grade Progression[/]",
        box=box.ROUNDED,
        border_style="green",
        width=60,
    )
    console.print(panel)


def print_grade_scale(grade_scale: list[str]) -> None:
    """Print the grade scale, weakest first."""
    console.print("  " + "  <  ".join(f"[bold]{g}[/]" for g in grade_scale))


def print_climb_result(action: str, climb: dict, streak: int) -> None:
    """Print confirmation after a climb is logged or edited."""
    lines: list[str] = []
    lines.append("")
    lines.append(
        f"  #{climb.get('id')}  {climb.get('climb_date')}  {climb.get('gym')}  "
        f"{climb.get('route_type')} {climb.get('grade')}  {climb.get('outcome')}"
    )
    lines.append(f"  Weekly streak: [bold]{streak}[/]")
    lines.append("")
    panel = Panel(
        "\n".join(lines),
        title=f"[bold]Climb {action}[/]",
        box=box.ROUNDED,
        border_style="green",
        width=60,
    )
    console.print(panel)


def print_setup_result(user: dict) -> None:
    """Print the active user after setup."""
    console.print(
        f"[green]Now logging climbs as [bold]{user.get('first_name')}[/] ({user.get('email')})[/]"
    )


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]{message}[/]")


def print_no_user_message() -> None:
    """Print message when no active user is configured."""
    panel = Panel(
        "\n  No user set. Run [bold]climb-stats setup --email you@example.com[/] first.\n",
        title="[bold]CLIMB STATS[/]",
        box=box.ROUNDED,
        border_style="grey50",
        width=60,
    )
    console.print(panel)


def print_no_data_message() -> None:
    """Print message when there are no climbs yet."""
    panel = Panel(
        "\n  No climbs yet. Log one with [bold]climb-stats log[/].\n",
        title="[bold]CLIMB STATS[/]",
        box=box.ROUNDED,
        border_style="grey50",
        width=60,
    )
    console.print(panel)
