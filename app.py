from __future__ import annotations

import json

import pandas as pd
import streamlit as st

from roadmap.certifications import calculate_certification_roi, get_certification_preparation_tips
from roadmap.companion import companion_response
from roadmap import config
from roadmap.config import setup_logging
from roadmap.connectors import build_job_search_links, build_training_links, fetch_live_jobs
from roadmap.errors import RoadmapInputError
from roadmap.export import (
    certifications_frame,
    export_payload,
    gaps_frame,
    milestones_frame,
    profile_from_payload,
    resources_frame,
)
from roadmap.gap_analysis import get_skill_development_recommendations
from roadmap.models import SKILL_CATEGORIES
from roadmap.parsers import extract_skill_signals
from roadmap.planner import build_career_roadmap
from roadmap.roles import known_roles, suggest_roles

APP_TITLE = "Career Roadmap Studio"
APP_SUBTITLE = "Skills gap, learning paths, timeline and certifications for your next role"
SKILL_COLUMNS = ["name", "category", "proficiency"]
SCENARIO_PRESETS = {
    "Mid-level Engineer to Senior": {
        "current_role": "Software Engineer",
        "target_role": "Senior Software Engineer",
        "years_of_experience": 3,
        "time_per_week": 10,
        "budget": 500,
        "skills": [
            {"name": "JavaScript/TypeScript", "category": "technical", "proficiency": 3},
            {"name": "REST APIs", "category": "technical", "proficiency": 3},
            {"name": "Git & Version Control", "category": "technical", "proficiency": 4},
            {"name": "Communication", "category": "soft", "proficiency": 3},
        ],
    },
    "Analyst to Data Scientist": {
        "current_role": "Data Analyst",
        "target_role": "Data Scientist",
        "years_of_experience": 2,
        "time_per_week": 15,
        "budget": 300,
        "skills": [
            {"name": "SQL", "category": "technical", "proficiency": 4},
            {"name": "Python", "category": "technical", "proficiency": 2},
            {"name": "Data Visualization", "category": "technical", "proficiency": 3},
            {"name": "Statistics", "category": "technical", "proficiency": 2},
        ],
    },
    "Senior Engineer to Manager": {
        "current_role": "Senior Software Engineer",
        "target_role": "Engineering Manager",
        "years_of_experience": 7,
        "time_per_week": 6,
        "budget": 1000,
        "skills": [
            {"name": "Technical Background", "category": "technical", "proficiency": 4},
            {"name": "Technical Strategy", "category": "leadership", "proficiency": 3},
            {"name": "Conflict Resolution", "category": "soft", "proficiency": 2},
        ],
    },
}


def default_form_values() -> dict:
    return {
        "current_role": "",
        "target_role": "",
        "years_of_experience": 3,
        "time_per_week": 10,
        "budget": 500,
        "skills": [],
    }


def ensure_state():
    if "roadmap" not in st.session_state:
        st.session_state["roadmap"] = None
    if "last_profile" not in st.session_state:
        st.session_state["last_profile"] = None
    if "form_defaults" not in st.session_state:
        st.session_state["form_defaults"] = default_form_values()


def apply_preset(preset_name: str):
    st.session_state["form_defaults"] = SCENARIO_PRESETS[preset_name]
    st.session_state["roadmap"] = None


@st.cache_data(ttl=config.JOB_CACHE_TTL_S)
def cached_live_jobs(role: str) -> list[dict[str, str]]:
    return fetch_live_jobs(role, max_results=8)


def skills_editor_frame(defaults: dict, parsed_skills: list) -> pd.DataFrame:
    rows = list(defaults.get("skills", []))
    listed = {row["name"].lower() for row in rows}
    for skill in parsed_skills:
        if skill.name.lower() not in listed:
            rows.append({"name": skill.name, "category": skill.category, "proficiency": skill.proficiency})
    return pd.DataFrame(rows, columns=SKILL_COLUMNS)


def render_intake(defaults: dict):
    with st.expander("Section A - Profile & Goals", expanded=True):
        uploaded_file = st.file_uploader("Seed skills from resume (optional)", type=["pdf", "docx", "txt"])
        parsed = extract_skill_signals(uploaded_file) if uploaded_file else {"skills": []}
        if parsed.get("skills"):
            st.caption(f"Detected from resume: {', '.join(parsed['keywords'])}")

        with st.form("intake_form"):
            c1, c2 = st.columns(2)
            with c1:
                current_role = st.text_input("Current role", value=defaults["current_role"])
                target_role = st.text_input(
                    "Target role",
                    value=defaults["target_role"],
                    help=f"Known roles: {', '.join(known_roles())}",
                )
                years = st.number_input("Years of experience", min_value=0, max_value=50, value=int(defaults["years_of_experience"]))
            with c2:
                time_per_week = st.slider("Study hours per week", 1, 40, int(defaults["time_per_week"]))
                budget = st.number_input("Learning budget (USD)", min_value=0, max_value=20000, value=int(defaults["budget"]))
                held = st.text_input("Certifications you already hold (comma separated)", value="")

            st.markdown("Current skills (proficiency 0 = none, 5 = expert)")
            skills_df = st.data_editor(
                skills_editor_frame(defaults, parsed.get("skills", [])),
                num_rows="dynamic",
                use_container_width=True,
                column_config={
                    "category": st.column_config.SelectboxColumn("category", options=list(SKILL_CATEGORIES)),
                    "proficiency": st.column_config.NumberColumn("proficiency", min_value=0, max_value=5, step=1),
                },
                key="skills_editor",
            )
            submitted = st.form_submit_button("Generate career roadmap")

    if not submitted:
        return

    skills = [
        {"name": str(row["name"]).strip(), "category": row["category"] or "technical", "proficiency": int(row["proficiency"] or 0)}
        for row in skills_df.fillna({"proficiency": 0, "category": "technical", "name": ""}).to_dict("records")
        if str(row["name"]).strip()
    ]
    payload = {
        "current_role": current_role,
        "years_of_experience": years,
        "current_skills": skills,
        "certifications": [c.strip() for c in held.split(",") if c.strip()],
        "constraints": {"time_per_week": time_per_week, "budget": budget},
    }
    profile = profile_from_payload(payload)
    try:
        roadmap = build_career_roadmap(profile, target_role)
    except RoadmapInputError as exc:
        st.error(str(exc))
        return

    st.session_state["form_defaults"] = {
        "current_role": current_role,
        "target_role": target_role,
        "years_of_experience": years,
        "time_per_week": time_per_week,
        "budget": budget,
        "skills": skills,
    }
    st.session_state["roadmap"] = roadmap
    st.session_state["last_profile"] = profile


def render_gap_analysis(roadmap, profile):
    analysis = roadmap.skills_gap
    with st.expander("Section B - Skills Gap", expanded=True):
        c1, c2, c3 = st.columns(3)
        c1.metric("Gap Score", f"{analysis.gap_score}%", analysis.readiness_level.title())
        c1.progress(analysis.gap_score / 100.0)
        c2.metric("Skill Gaps", len(analysis.gaps))
        c3.metric("Critical Gaps", sum(1 for g in analysis.gaps if g.priority == "critical"))
        st.info(analysis.summary)

        frame = gaps_frame(analysis)
        if not frame.empty:
            st.bar_chart(frame.set_index("Skill")[["Current", "Required"]])
            st.dataframe(frame, use_container_width=True, hide_index=True)
        for gap in analysis.gaps[:5]:
            st.markdown(f"**{gap.skill}** ({gap.priority}) - {gap.reasoning}")
            for rec in get_skill_development_recommendations(gap):
                st.write(f"- {rec}")

        suggestions = suggest_roles(profile)
        st.markdown("Closest matching roles for your current skills")
        st.dataframe(
            pd.DataFrame([{"Role": s.role, "Match %": s.match_pct} for s in suggestions]),
            use_container_width=True,
            hide_index=True,
        )


def render_learning_paths(roadmap):
    with st.expander("Section C - Learning Paths", expanded=True):
        if not roadmap.learning_paths:
            st.success("No learning gaps for this role.")
        for path in roadmap.learning_paths:
            cost = path.estimated_cost
            st.markdown(f"#### {path.order}. {path.title}")
            st.caption(
                f"{path.duration} | {path.difficulty} | ${cost.min:,.0f}-${cost.max:,.0f} {cost.currency}"
            )
            st.write(path.description)
            st.write(f"Target skills: {', '.join(path.target_skills)}")
            st.dataframe(resources_frame(path), use_container_width=True, hide_index=True)


def render_timeline(roadmap):
    timeline = roadmap.timeline
    with st.expander("Section D - Timeline & Milestones", expanded=True):
        c1, c2, c3 = st.columns(3)
        c1.metric("Total Duration", timeline.total_duration)
        c2.metric("Start", timeline.current_date)
        c3.metric("Target Date", timeline.target_date)
        for phase in timeline.phases:
            st.markdown(f"**Phase {phase.phase}: {phase.title}** (months {phase.start_month}-{phase.end_month}, {phase.duration})")
            a, b = st.columns(2)
            a.write("Goals")
            for goal in phase.goals:
                a.write(f"- {goal}")
            b.write("Success metrics")
            for metric in phase.success_metrics:
                b.write(f"- {metric}")
        st.markdown("Milestones")
        st.dataframe(milestones_frame(roadmap.milestones), use_container_width=True, hide_index=True)
        x, y, z = st.columns(3)
        x.markdown("**Assumptions**")
        for item in timeline.assumptions:
            x.write(f"- {item}")
        y.markdown("**Accelerators**")
        for item in timeline.accelerators:
            y.write(f"- {item}")
        z.markdown("**Risks**")
        for item in timeline.risks:
            z.write(f"- {item}")


def render_certifications(roadmap):
    with st.expander("Section E - Certifications", expanded=True):
        if not roadmap.certifications:
            st.info("No certifications match your gaps for this role.")
            return
        st.dataframe(certifications_frame(roadmap.certifications), use_container_width=True, hide_index=True)
        for cert in roadmap.certifications:
            roi = calculate_certification_roi(cert)
            st.markdown(f"**{cert.name}** - {cert.provider} ({cert.suggested_timeline})")
            st.caption(f"Salary uplift {roi.estimated_salary_increase}, time to ROI {roi.time_to_roi}")
            for tip in get_certification_preparation_tips(cert):
                st.write(f"- {tip}")


def render_connectors(roadmap):
    with st.expander("Section F - Jobs + Training", expanded=False):
        location = st.text_input("Preferred job location", value="Remote")
        live_jobs = cached_live_jobs(roadmap.target_role)
        if live_jobs:
            for job in live_jobs:
                st.write(f"- [{job['title']} - {job['company']} ({job['source']})]({job['url']})")
        else:
            st.info("No live listings found. Use direct platform links.")
        for item in build_job_search_links(roadmap.target_role, location):
            st.write(f"- [{item['title']}]({item['url']})")
        for item in build_training_links([g.skill for g in roadmap.skills_gap.gaps[:3]]):
            st.write(f"- [{item['provider']}: {item['title']}]({item['url']})")


def render_companion_and_export(roadmap, profile):
    with st.expander("Section G - Companion + Export", expanded=True):
        prompt = st.text_input("Ask about your roadmap", value="Where should I start?")
        if st.button("Get guidance"):
            st.write(companion_response(prompt, roadmap))
        report = export_payload(profile, roadmap)
        st.download_button(
            "Download Roadmap JSON",
            data=json.dumps(report, indent=2),
            file_name=f"{roadmap.target_role.lower().replace(' ', '_')}_roadmap.json",
            mime="application/json",
        )


setup_logging()
st.set_page_config(page_title=APP_TITLE, layout="wide")
st.title(APP_TITLE)
st.caption(APP_SUBTITLE)
ensure_state()

with st.sidebar:
    preset = st.selectbox("Load preset profile", list(SCENARIO_PRESETS.keys()))
    if st.button("Apply Preset"):
        apply_preset(preset)
        st.success(f"Loaded preset: {preset}")

render_intake(st.session_state["form_defaults"])

current_roadmap = st.session_state.get("roadmap")
current_profile = st.session_state.get("last_profile")
if not (current_roadmap and current_profile):
    st.info("Fill in Section A and generate your roadmap to see results.")
else:
    render_gap_analysis(current_roadmap, current_profile)
    render_learning_paths(current_roadmap)
    render_timeline(current_roadmap)
    render_certifications(current_roadmap)
    render_connectors(current_roadmap)
    render_companion_and_export(current_roadmap, current_profile)
