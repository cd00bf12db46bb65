from datetime import timedelta
from pathlib import Path
from typing import Any, List, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from calstats.domain import CalendarAnalysis, Event
from calstats.stats import (
    is_all_day_event,
    rank_by_count,
    rank_by_duration,
    rank_by_total_days,
)

TEMPLATE_NAME = "report.txt.j2"


def format_duration(duration: timedelta) -> str:
    """Render a duration as ``XhYm``, or ``Ym`` when under an hour."""
    total_minutes = int(duration.total_seconds() // 60)
    sign = "-" if total_minutes < 0 else ""
    hours, minutes = divmod(abs(total_minutes), 60)
    if hours > 0:
        return f"{sign}{hours}h{minutes}m"
    return f"{sign}{minutes}m"


def event_duration_label(event: Event) -> str:
    """Suffix shown after an event in the event list."""
    if is_all_day_event(event):
        return " (-)"
    duration = event.duration()
    if duration is None:
        return ""
    return f" ({format_duration(duration)})"


def _format_summary_value(value: Any) -> str:
    if isinstance(value, timedelta):
        return format_duration(value)
    return str(value)


def _summary_lines(analysis: CalendarAnalysis) -> List[Tuple[str, str]]:
    summary = analysis.summary()
    return [
        (key, _format_summary_value(summary[key])) for key in sorted(summary)
    ]


def generate_report(analysis: CalendarAnalysis) -> str:
    """
    Generate a plain-text statistics report using Jinja2 templates.

    Args:
        analysis: The result of one calendar analysis run

    Returns:
        String containing the rendered report
    """
    template_dir = Path(__file__).parent / "templates"

    if not template_dir.exists():
        raise FileNotFoundError(
            f"Template directory not found: {template_dir}"
        )

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["duration"] = format_duration
    template = env.get_template(TEMPLATE_NAME)

    return template.render(
        start_date=analysis.start_date.isoformat(),
        end_date=analysis.end_date.isoformat(),
        events=[
            (
                event.start.strftime("%Y-%m-%d %H:%M") if event.start else "",
                event.summary,
                event_duration_label(event),
            )
            for event in analysis.events
        ],
        summary=_summary_lines(analysis),
        by_count=rank_by_count(analysis.title_stats),
        by_duration=[
            stat
            for stat in rank_by_duration(analysis.title_stats)
            if stat.duration > timedelta(0)
        ],
        by_days=rank_by_total_days(analysis.all_day_stats),
        category_stats=analysis.category_stats,
        working_hours=analysis.working_hours,
        problems=analysis.problems,
    )
