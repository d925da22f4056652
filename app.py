"""Streamlit UI for the job board."""
from __future__ import annotations

import sys
from datetime import datetime, time, timezone
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT))

from jobboard.config import ensure_dirs, storage_path
from jobboard.context import AppContext, build_context
from jobboard.errors import JobBoardError
from jobboard.log import get_logger
from jobboard.models import (
    ALL_KINDS,
    ApplicationStatus,
    EmploymentKind,
    FilterCriteria,
    JobListing,
    ListingFields,
    RecruiterSession,
    Role,
)
from jobboard.report import (
    board_metrics,
    build_listing_card,
    format_age,
    recruiter_metrics,
)
from jobboard.storage import FileStore
from jobboard.tracker import ALL_STATUSES

log = get_logger(__name__)

# ── Constants ────────────────────────────────────────────────────────────

KIND_OPTIONS: list[str] = [ALL_KINDS] + [k.value for k in EmploymentKind]
STATUS_OPTIONS: list[str] = [ALL_STATUSES] + [s.value for s in ApplicationStatus]

_PRIORITY_ICONS: dict[str, str] = {"high": "🔴", "medium": "🟠", "low": "⚪"}
_STATUS_ICONS: dict[str, str] = {
    "pending": "⏳",
    "reviewing": "👀",
    "interview-scheduled": "📅",
    "accepted": "✅",
    "rejected": "❌",
}

_CSS = """
<style>
[data-testid="stAppViewContainer"] {
    background: linear-gradient(135deg, #e8eaf6 0%, #f3e5f5 40%, #e0f2f1 100%);
}
[data-testid="stSidebar"] {
    background: rgba(255,255,255,0.55);
    backdrop-filter: blur(16px);
    border-right: 1px solid rgba(255,255,255,0.3);
}
.block-container {
    padding-top: 2rem;
}
[data-testid="stMetric"],
[data-testid="stForm"],
[data-testid="stExpander"] {
    background: rgba(255,255,255,0.6);
    border-radius: 12px;
    border: 1px solid rgba(255,255,255,0.4);
    box-shadow: 0 4px 16px rgba(0,0,0,0.06);
}
[data-testid="stMetric"] {
    padding: 0.75rem 1rem;
}
.stButton > button[kind="primary"] {
    border-radius: 8px;
    font-weight: 600;
}
h1, h2, h3 {
    color: #1a1a2e;
}
</style>
"""

# ── Helpers ──────────────────────────────────────────────────────────────


def _ctx() -> AppContext:
    if "ctx" not in st.session_state:
        ensure_dirs()
        st.session_state["ctx"] = build_context(FileStore(storage_path()))
    return st.session_state["ctx"]


def _now() -> datetime:
    return _ctx().clock.now()


def _kind_label(value: str) -> str:
    return "All Jobs" if value == ALL_KINDS else EmploymentKind(value).label


def _status_label(value: str) -> str:
    return "All" if value == ALL_STATUSES else ApplicationStatus(value).label


def _show_errors(exc: JobBoardError) -> None:
    st.error(str(exc))


# ── Page: Sign in / Register ─────────────────────────────────────────────


def page_auth() -> None:
    st.header("Job Board")
    st.write("Find your next role, or the people to fill one.")

    ctx = _ctx()
    tab_login, tab_register = st.tabs(["Sign in", "Register"])

    with tab_login:
        with st.form("login_form"):
            role = st.radio(
                "I am a",
                [r.value for r in Role],
                format_func=str.capitalize,
                horizontal=True,
                key="login_role",
            )
            email = st.text_input("Email", key="login_email")
            password = st.text_input("Password", type="password", key="login_password")
            submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)

        if submitted:
            try:
                user = ctx.sessions.login(email.strip(), password, role)
                st.success(f"Welcome back, {user.display_name}!")
                st.rerun()
            except JobBoardError as exc:
                _show_errors(exc)

    with tab_register:
        role = st.radio(
            "Account type",
            [r.value for r in Role],
            format_func=str.capitalize,
            horizontal=True,
            key="register_role",
        )
        with st.form("register_form"):
            name = st.text_input("Full name", key="register_name")
            email = st.text_input("Email", key="register_email")
            password = st.text_input("Password", type="password", key="register_password")
            organization = ""
            if role == Role.RECRUITER.value:
                organization = st.text_input("Company name", key="register_org")
            submitted = st.form_submit_button("Create account", type="primary", use_container_width=True)

        if submitted:
            errors: list[str] = []
            if not name.strip():
                errors.append("Full name is required.")
            if not email.strip():
                errors.append("Email is required.")
            if not password:
                errors.append("Password is required.")
            if role == Role.RECRUITER.value and not organization.strip():
                errors.append("Company name is required for recruiters.")

            if errors:
                for e in errors:
                    st.error(e)
            else:
                user = ctx.sessions.register(
                    email.strip(), password, name.strip(), role,
                    organization=organization.strip() or None,
                )
                st.success(f"Account created. Welcome, {user.display_name}!")
                st.rerun()


# ── Page: Browse Jobs (candidate) ────────────────────────────────────────


def page_browse() -> None:
    st.header("Browse Jobs")
    ctx = _ctx()
    user = ctx.sessions.current

    c1, c2 = st.columns([3, 1])
    with c1:
        query = st.text_input("Search", placeholder="Job title, company or location")
    with c2:
        kind = st.selectbox("Job type", KIND_OPTIONS, format_func=_kind_label)

    jobs = ctx.catalog.filter(FilterCriteria(query=query, kind=kind))
    metrics = board_metrics(jobs)
    m1, m2, m3 = st.columns(3)
    m1.metric("Available Jobs", metrics["jobs"])
    m2.metric("Locations", metrics["locations"])
    m3.metric("Companies", metrics["organizations"])

    st.divider()
    if not jobs:
        st.info("No jobs found. Try adjusting your search criteria.")
        return

    applied = {a.listing_id for a in ctx.tracker.for_candidate(user)}
    now = _now()
    for job in jobs:
        with st.container(border=True):
            st.markdown(build_listing_card(job, now))
            if job.id in applied:
                st.caption("✅ You have applied for this job.")
                continue
            with st.expander("Apply Now"):
                _apply_form(job)


def _apply_form(job: JobListing) -> None:
    ctx = _ctx()
    with st.form(f"apply_{job.id}"):
        cover = st.text_area("Cover letter (optional)", height=120, key=f"cover_{job.id}")
        resume = st.text_input(
            "Resume link or file name (optional)",
            placeholder="e.g. https://drive.example.com/my-cv.pdf",
            key=f"resume_{job.id}",
        )
        submitted = st.form_submit_button("Submit application", type="primary")

    if submitted:
        try:
            ctx.tracker.apply(ctx.sessions.current, job.id, cover_letter=cover, resume=resume)
            st.success(f"Application submitted for {job.title} at {job.organization}.")
            st.rerun()
        except JobBoardError as exc:
            _show_errors(exc)


# ── Page: My Applications (candidate) ────────────────────────────────────


def page_my_applications() -> None:
    st.header("My Applications")
    ctx = _ctx()
    user = ctx.sessions.current

    everything = ctx.tracker.for_candidate(user)
    c1, c2, c3 = st.columns(3)
    c1.metric("Total Applications", len(everything))
    c2.metric("Pending", sum(1 for a in everything if a.status is ApplicationStatus.PENDING))
    c3.metric("Interviews", sum(1 for a in everything if a.status is ApplicationStatus.INTERVIEW_SCHEDULED))

    status = st.radio("Show", STATUS_OPTIONS, format_func=_status_label, horizontal=True)
    apps = ctx.tracker.for_candidate(user, status)
    if not apps:
        st.info("No applications yet. Head to **Browse Jobs** to find your next role.")
        return

    import pandas as pd

    df = pd.DataFrame(
        [
            {
                "title": a.job_title,
                "company": a.organization,
                "status": f"{_STATUS_ICONS.get(a.status.value, '')} {a.status.label}",
                "applied_at": a.applied_at.strftime("%Y-%m-%d"),
                "interview": (
                    f"{a.interview.at.strftime('%Y-%m-%d %H:%M')} @ {a.interview.location}"
                    if a.interview else ""
                ),
                "feedback": a.feedback or "",
            }
            for a in apps
        ]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)


# ── Page: Job Management (recruiter) ─────────────────────────────────────


def _listing_form(key: str, initial: ListingFields | None, submit_label: str) -> ListingFields | None:
    """Render the listing form; returns parsed fields on submit, else None."""
    init = initial
    with st.form(key):
        title = st.text_input(
            "Job title", value=init.title if init else "",
            placeholder="e.g. Senior Frontend Developer", key=f"{key}_title",
        )
        c1, c2 = st.columns(2)
        with c1:
            location = st.text_input(
                "Location", value=init.location if init else "",
                placeholder="e.g. San Francisco, CA", key=f"{key}_location",
            )
            salary_min = st.text_input(
                "Min salary", value=str(init.salary_min) if init else "",
                placeholder="e.g. 120000", key=f"{key}_min",
            )
        with c2:
            kinds = [k.value for k in EmploymentKind]
            current = EmploymentKind(init.kind).value if init else EmploymentKind.FULL_TIME.value
            kind = st.selectbox(
                "Job type", kinds, index=kinds.index(current),
                format_func=_kind_label, key=f"{key}_kind",
            )
            salary_max = st.text_input(
                "Max salary", value=str(init.salary_max) if init else "",
                placeholder="e.g. 180000", key=f"{key}_max",
            )
        description = st.text_area(
            "Description", value=init.description if init else "", height=120, key=f"{key}_description",
        )
        requirements = st.text_input(
            "Requirements (comma separated)",
            value=", ".join(init.requirements) if init else "",
            key=f"{key}_requirements",
        )
        benefits = st.text_input(
            "Benefits (comma separated)",
            value=", ".join(init.benefits) if init else "",
            key=f"{key}_benefits",
        )
        submitted = st.form_submit_button(submit_label, type="primary", use_container_width=True)

    if not submitted:
        return None
    try:
        return ListingFields.from_form(
            title=title,
            location=location,
            kind=kind,
            salary_min=salary_min,
            salary_max=salary_max,
            description=description,
            requirements=requirements,
            benefits=benefits,
        )
    except JobBoardError as exc:
        _show_errors(exc)
        return None


def page_jobs() -> None:
    st.header("Job Management")
    ctx = _ctx()
    user = ctx.sessions.current
    if not isinstance(user, RecruiterSession):
        st.error("Only recruiters can manage job listings.")
        return

    mine = ctx.catalog.owned_by(user)
    metrics = recruiter_metrics(mine, ctx.tracker.inbox(user))
    c1, c2, c3 = st.columns(3)
    c1.metric("Active Jobs", metrics["active_listings"])
    c2.metric("Total Applications", metrics["applications"])
    c3.metric("Pending Review", metrics["pending"])

    with st.expander("➕ Create New Job", expanded=not mine):
        fields = _listing_form("create_listing", None, "Create Job")
        if fields is not None:
            try:
                job = ctx.catalog.create(user, fields)
                st.success(f"Job created: {job.title}")
                st.rerun()
            except JobBoardError as exc:
                _show_errors(exc)

    st.divider()
    st.subheader(f"Your listings at {user.organization or 'your company'}")
    if not mine:
        st.info("You haven't posted any jobs yet.")
        return

    now = _now()
    editing = st.session_state.get("editing")
    for job in mine:
        with st.container(border=True):
            st.markdown(build_listing_card(job, now, applications=ctx.tracker.count_for(job.id)))
            b1, b2 = st.columns(2)
            if b1.button("Edit", key=f"edit_{job.id}", use_container_width=True):
                st.session_state["editing"] = job.id
                st.rerun()
            if b2.button("Delete", key=f"delete_{job.id}", type="secondary", use_container_width=True):
                try:
                    ctx.catalog.delete(user, job.id)
                    st.session_state.pop("editing", None)
                    st.success("The job listing has been removed.")
                    st.rerun()
                except JobBoardError as exc:
                    _show_errors(exc)

            if editing == job.id:
                fields = _listing_form(f"edit_form_{job.id}", ListingFields.from_listing(job), "Save Changes")
                if fields is not None:
                    try:
                        ctx.catalog.update(user, job.id, fields)
                        st.session_state.pop("editing", None)
                        st.success("Your job listing has been updated.")
                        st.rerun()
                    except JobBoardError as exc:
                        _show_errors(exc)
                if st.button("Cancel", key=f"cancel_{job.id}"):
                    st.session_state.pop("editing", None)
                    st.rerun()


# ── Page: Applications inbox (recruiter) ─────────────────────────────────


def page_inbox() -> None:
    st.header("Applications")
    ctx = _ctx()
    user = ctx.sessions.current

    mine = ctx.catalog.owned_by(user)
    options = [""] + [j.id for j in mine]
    titles = {j.id: j.title for j in mine}
    listing_id = st.selectbox(
        "Job",
        options,
        format_func=lambda i: "All jobs" if not i else titles.get(i, i),
    )
    apps = ctx.tracker.inbox(user, listing_id or None)
    if not apps:
        st.info("No applications yet.")
        return

    for app in apps:
        icon = _STATUS_ICONS.get(app.status.value, "")
        with st.expander(f"{icon}  **{app.candidate_name}** · {app.job_title} ({app.status.label})"):
            st.markdown(f"**Email:** {app.candidate_email}")
            st.markdown(f"**Applied:** {app.applied_at.strftime('%Y-%m-%d')}")
            if app.resume:
                st.markdown(f"**Resume:** {app.resume}")
            if app.cover_letter:
                st.markdown("**Cover letter:**")
                st.write(app.cover_letter)
            if app.interview:
                st.info(
                    f"Interview {app.interview.at.strftime('%Y-%m-%d %H:%M')} at {app.interview.location}"
                    + (f" · {app.interview.notes}" if app.interview.notes else "")
                )

            c1, c2, c3 = st.columns(3)
            try:
                if c1.button("Mark reviewing", key=f"rev_{app.id}", use_container_width=True):
                    ctx.tracker.update_status(user, app.id, ApplicationStatus.REVIEWING)
                    st.rerun()
                if c2.button("Accept", key=f"acc_{app.id}", type="primary", use_container_width=True):
                    ctx.tracker.update_status(user, app.id, ApplicationStatus.ACCEPTED)
                    st.rerun()
                if c3.button("Reject", key=f"rej_{app.id}", use_container_width=True):
                    ctx.tracker.update_status(
                        user, app.id, ApplicationStatus.REJECTED,
                        feedback="Unfortunately, we decided to move forward with other candidates.",
                    )
                    st.rerun()
            except JobBoardError as exc:
                _show_errors(exc)

            with st.form(f"interview_{app.id}"):
                st.markdown("**Schedule interview**")
                d1, d2 = st.columns(2)
                with d1:
                    day = st.date_input("Date", key=f"day_{app.id}")
                with d2:
                    at_time = st.time_input("Time", value=time(14, 0), key=f"time_{app.id}")
                where = st.text_input("Location", placeholder="Office address or video link", key=f"where_{app.id}")
                notes = st.text_area("Notes", height=80, key=f"notes_{app.id}")
                if st.form_submit_button("Schedule"):
                    try:
                        when = datetime.combine(day, at_time, tzinfo=timezone.utc)
                        ctx.tracker.schedule_interview(user, app.id, when, where, notes)
                        st.success("Interview scheduled.")
                        st.rerun()
                    except JobBoardError as exc:
                        _show_errors(exc)


# ── Page: Notifications ──────────────────────────────────────────────────


def page_notifications() -> None:
    st.header("Notifications")
    ctx = _ctx()
    user = ctx.sessions.current
    center = ctx.notifications

    items = center.for_user(user.id)
    unread = center.unread_count(user.id)
    c1, c2 = st.columns([3, 1])
    c1.caption(f"{unread} unread")
    if c2.button("Mark all read", disabled=not unread, use_container_width=True):
        center.mark_all_read(user.id)
        st.rerun()

    if not items:
        st.info("You're all caught up.")
        return

    now = _now()
    for n in items:
        with st.container(border=True):
            icon = _PRIORITY_ICONS.get(n.priority, "")
            weight = "" if n.read else "**"
            st.markdown(f"{icon} {weight}{n.title}{weight} · _{format_age(n.timestamp, now)}_")
            st.write(n.message)
            b1, b2 = st.columns(2)
            if not n.read and b1.button("Mark read", key=f"read_{n.id}"):
                center.mark_read(user.id, n.id)
                st.rerun()
            if b2.button("Dismiss", key=f"dismiss_{n.id}"):
                center.remove(user.id, n.id)
                st.rerun()


# ── Page: Profile (both roles) ───────────────────────────────────────────


def page_profile() -> None:
    ctx = _ctx()
    user = ctx.sessions.current
    recruiter = isinstance(user, RecruiterSession)
    st.header("Company Profile" if recruiter else "Your Profile")

    try:
        profile = ctx.profiles.get(user)
    except JobBoardError as exc:
        _show_errors(exc)
        return

    st.markdown(f"**{user.display_name}** · {user.email}")
    if recruiter:
        st.caption(user.organization or "No company set")
    if profile.is_blank:
        st.info("Your profile is empty. Fill in the details below.")

    with st.form("profile_form"):
        c1, c2 = st.columns(2)
        with c1:
            phone = st.text_input("Phone", value=profile.phone, placeholder="+1 (555) 123-4567")
        with c2:
            location = st.text_input("Location", value=profile.location, placeholder="City, Country")

        changes: dict[str, object] = {}
        if recruiter:
            changes["website"] = st.text_input(
                "Company website", value=profile.website, placeholder="https://yourcompany.com",
            )
        else:
            uploaded = st.file_uploader("CV / resume", type=["pdf", "doc", "docx"])
            if profile.cv_ref:
                st.caption(f"Current CV: {profile.cv_ref}")
                drop_cv = st.checkbox("Remove current CV")
            else:
                drop_cv = False
            changes["skills"] = st.text_input(
                "Skills (comma separated)",
                value=", ".join(profile.skills),
                placeholder="React, TypeScript, Node.js, Python...",
            )
            changes["experience"] = st.text_area("Experience", value=profile.experience, height=100)
            changes["education"] = st.text_area("Education", value=profile.education, height=80)
            changes["linkedin"] = st.text_input(
                "LinkedIn profile", value=profile.linkedin,
                placeholder="https://linkedin.com/in/yourprofile",
            )

        bio = st.text_area("Bio", value=profile.bio, height=100)
        submitted = st.form_submit_button("Save Profile", type="primary", use_container_width=True)

    if not submitted:
        return
    changes.update(phone=phone, location=location, bio=bio)
    if not recruiter:
        # Only the file name is kept
        if uploaded is not None:
            changes["cv_ref"] = uploaded.name
        elif drop_cv:
            changes["cv_ref"] = None
    try:
        ctx.profiles.save(user, **changes)
        st.success("Profile saved.")
        st.rerun()
    except JobBoardError as exc:
        _show_errors(exc)


# ── Main ─────────────────────────────────────────────────────────────────


def _inject_css() -> None:
    st.markdown(_CSS, unsafe_allow_html=True)


def _sidebar_account() -> None:
    ctx = _ctx()
    user = ctx.sessions.current
    if user is None:
        return
    with st.sidebar:
        st.divider()
        st.markdown(f"**{user.display_name}**")
        st.caption(user.email)
        if isinstance(user, RecruiterSession) and user.organization:
            st.caption(f"Recruiter · {user.organization}")
        else:
            st.caption(user.role.value.capitalize())

        unread = ctx.notifications.unread_count(user.id)
        if unread:
            st.markdown(f"🔔 **{unread}** unread notification(s)")

        st.divider()
        if st.button("Sign out", use_container_width=True):
            ctx.sessions.logout()
            st.session_state.pop("editing", None)
            st.rerun()


def _wrap(page):
    def _run() -> None:
        _inject_css()
        _sidebar_account()
        page()

    _run.__name__ = page.__name__
    return _run


def _pages() -> list:
    user = _ctx().sessions.current
    if user is None:
        return [st.Page(_wrap(page_auth), title="Sign in", icon="🔑", url_path="signin", default=True)]
    if user.role is Role.RECRUITER:
        return [
            st.Page(_wrap(page_jobs), title="Job Management", icon="💼", url_path="jobs", default=True),
            st.Page(_wrap(page_inbox), title="Applications", icon="📥", url_path="inbox"),
            st.Page(_wrap(page_profile), title="Profile", icon="👤", url_path="profile"),
            st.Page(_wrap(page_notifications), title="Notifications", icon="🔔", url_path="notifications"),
        ]
    return [
        st.Page(_wrap(page_browse), title="Browse Jobs", icon="🔍", url_path="browse", default=True),
        st.Page(_wrap(page_my_applications), title="My Applications", icon="📋", url_path="applications"),
        st.Page(_wrap(page_profile), title="Profile", icon="👤", url_path="profile"),
        st.Page(_wrap(page_notifications), title="Notifications", icon="🔔", url_path="notifications"),
    ]


nav = st.navigation(_pages())
nav.run()
