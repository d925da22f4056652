"""Formatting and dashboard figures for the rendering layer."""
from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from jobboard.models import Application, ApplicationStatus, JobListing, Salary

_DAY_SECONDS = 24 * 60 * 60


def format_salary(salary: Salary) -> str:
    c = salary.currency
    return f"{c}{salary.minimum:,} - {c}{salary.maximum:,}"


def format_posted(posted_at: datetime, now: datetime) -> str:
    """Coarse age for job cards: days, then weeks, then months (rounded up)."""
    days = math.ceil(abs((now - posted_at).total_seconds()) / _DAY_SECONDS)
    if days == 0:
        return "today"
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{math.ceil(days / 7)} weeks ago"
    return f"{math.ceil(days / 30)} months ago"


def format_age(ts: datetime, now: datetime) -> str:
    """Short age for notifications: 5m ago, 3h ago, 2d ago."""
    seconds = max((now - ts).total_seconds(), 0)
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{int(seconds // _DAY_SECONDS)}d ago"


def board_metrics(listings: Iterable[JobListing]) -> dict[str, int]:
    items = list(listings)
    return {
        "jobs": len(items),
        "locations": len({j.location for j in items}),
        "organizations": len({j.organization for j in items}),
    }


def recruiter_metrics(
    listings: Iterable[JobListing], applications: Iterable[Application]
) -> dict[str, int]:
    items = list(listings)
    apps = list(applications)
    return {
        "active_listings": sum(1 for j in items if j.active),
        "applications": len(apps),
        "pending": sum(1 for a in apps if a.status is ApplicationStatus.PENDING),
    }


def build_listing_card(
    listing: JobListing,
    now: datetime,
    applications: int | None = None,
) -> str:
    lines: list[str] = [
        f"### {listing.title}",
        f"**{listing.organization}** · {'Active' if listing.active else 'Inactive'}",
        "",
        f"- **Location:** {listing.location}",
        f"- **Type:** {listing.kind.label}",
        f"- **Salary:** {format_salary(listing.salary)}",
        f"- **Posted:** {format_posted(listing.posted_at, now)}",
    ]
    if applications is not None:
        lines.append(f"- **Applications:** {applications}")
    lines.append("")
    lines.append(listing.description)
    if listing.requirements:
        lines.append("")
        lines.append("**Requirements:** " + ", ".join(listing.requirements))
    if listing.benefits:
        lines.append("")
        lines.append("**Benefits:** " + ", ".join(listing.benefits))
    return "\n".join(lines)
