# app.py
# Run:
#   streamlit run app.py
#
# Three screens: impact quiz, recycling game, sustainability tracker.
# The quiz answers are the only thing saved (see ECOTRACK_DB_URL); the
# tracker rebuilds its days from them.

import logging

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from app_utils.config import DB_URL, setup_logging
from app_utils.plots import completion_bar_plot, figure_png
from app_utils.storage import SnapshotStore, init_db
from features import game, quiz, tracker
from features.insights import days_frame, tracker_summary

setup_logging()
logger = logging.getLogger(__name__)

# =========================
# 0) APP CONFIG + THEME
# =========================
st.set_page_config(page_title="EcoTrack", layout="wide", page_icon="🌱")

CUSTOM_CSS = """
<style>
.block-container {padding-top: 1.2rem; padding-bottom: 2rem; max-width: 1100px;}
h1, h2, h3 {letter-spacing: -0.02em;}
.card {
  border: 1px solid rgba(255,255,255,0.08);
  background: rgba(255,255,255,0.03);
  border-radius: 18px;
  padding: 16px 16px;
  box-shadow: 0 12px 30px rgba(0,0,0,0.18);
  margin-bottom: 12px;
}
.small {opacity: 0.85; font-size: 0.92rem;}
.badge {
  display:inline-block;
  padding: 4px 10px;
  border-radius: 999px;
  background: rgba(22, 163, 74, 0.18);
  border: 1px solid rgba(22, 163, 74, 0.35);
  font-size: 0.85rem;
}
hr {opacity: 0.25;}
</style>
"""
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

PAGES = ["Quiz", "Game", "Tracker"]


# =========================
# 1) STORAGE
# =========================
@st.cache_resource
def get_store():
    init_db()
    return SnapshotStore()


store = get_store()


def go_to(page):
    st.session_state["page"] = page


def retake_quiz():
    st.session_state["page"] = "Quiz"
    st.session_state["quiz_submitted"] = False
    st.session_state["quiz_index"] = 0


# =========================
# 2) PLOTS
# =========================
def style_fig(fig, height=340):
    fig.update_layout(
        template="plotly_dark",
        height=height,
        margin=dict(l=16, r=16, t=52, b=16),
        title=dict(x=0.02),
        font=dict(size=13),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    fig.update_xaxes(showgrid=True, gridcolor="rgba(255,255,255,0.08)")
    fig.update_yaxes(showgrid=True, gridcolor="rgba(255,255,255,0.08)")
    return fig

def impact_bars(df):
    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["category"], y=df["chosen"], name="Your answer", marker_color="#16a34a"))
    fig.add_trace(go.Scatter(x=df["category"], y=df["worst"], mode="markers", name="Highest impact",
                             marker=dict(symbol="line-ew-open", size=24, color="#f87171")))
    fig.update_layout(title=dict(text="Impact by category (lower is better)"))
    fig.update_yaxes(title="impact", range=[0, int(df["worst"].max()) + 0.5])
    return style_fig(fig)

def completion_line(df):
    if df.empty:
        return None
    fig = px.line(df, x="day", y="completion", markers=True, title="Completion per day")
    fig.update_traces(line=dict(width=3))
    fig.update_yaxes(title="% done", range=[0, 105])
    fig.update_xaxes(dtick=1)
    return style_fig(fig, height=300)


# =========================
# 3) UI BLOCKS
# =========================
def header_block(name, subtitle, tag):
    st.markdown(f"""
    <div class="card">
      <div style="display:flex; justify-content:space-between; align-items:flex-start; gap:12px;">
        <div>
          <h2 style="margin:0;">{name}</h2>
          <div class="small">{subtitle}</div>
        </div>
        <div class="badge">{tag}</div>
      </div>
    </div>
    """, unsafe_allow_html=True)

def stat_card(items, tag=None):
    cells = "".join(
        f'<div><div class="small">{label}</div><div style="font-size:1.4rem;"><b>{value}</b></div></div>'
        for label, value in items
    )
    badge = f'<div class="badge">{tag}</div>' if tag else ""
    st.markdown(f"""
    <div class="card">
      <div style="display:flex; justify-content:space-between; align-items:center;">
        <div style="display:grid; grid-template-columns: repeat({len(items)}, 1fr); gap:24px;">{cells}</div>
        {badge}
      </div>
    </div>
    """, unsafe_allow_html=True)


# =========================
# 4) QUIZ
# =========================
def quiz_page():
    questions = quiz.QUESTIONS
    ss = st.session_state
    if "quiz_answers" not in ss:
        ss.quiz_answers = quiz.empty_answers(questions)
        ss.quiz_index = 0
        ss.quiz_submitted = False

    if ss.quiz_submitted:
        quiz_results(questions, ss.quiz_answers)
        return

    header_block("Environmental Impact Quiz",
                 "Answer the questions below to see personalized insights on how your choices impact the environment.",
                 f"{ss.quiz_index + 1} / {len(questions)}")

    q = questions[ss.quiz_index]
    st.subheader(q.category)
    labels = [o.label for o in q.options]
    current = quiz.chosen_value(q, ss.quiz_answers[ss.quiz_index])
    picked = st.radio(
        q.question,
        labels,
        index=[o.value for o in q.options].index(current) if current else None,
        key=f"quiz_q_{ss.quiz_index}",
    )
    if picked is not None:
        value = q.options[labels.index(picked)].value
        if value != ss.quiz_answers[ss.quiz_index]:
            ss.quiz_answers = quiz.set_answer(ss.quiz_answers, ss.quiz_index, value)

    c1, _, c2 = st.columns([1, 3, 1])
    with c1:
        if st.button("Previous", disabled=ss.quiz_index == 0, width="stretch"):
            ss.quiz_index = quiz.previous_index(ss.quiz_index)
            st.rerun()
    with c2:
        if not quiz.is_last(ss.quiz_index, len(questions)):
            if st.button("Next", width="stretch"):
                ss.quiz_index = quiz.next_index(ss.quiz_index, len(questions))
                st.rerun()
        elif st.button("Submit", type="primary", width="stretch"):
            ss.quiz_saved = store.save(ss.quiz_answers)
            if ss.quiz_saved:
                ss.pop("tracker_days", None)
            else:
                logger.warning("Quiz answers were not persisted")
            ss.quiz_submitted = True
            st.rerun()

def quiz_results(questions, answers):
    result = quiz.score_answers(questions, answers)
    header_block("Your Overall Results",
                 f"Score: {result.total} / {result.maximum} ({result.percent}%)",
                 "IMPACT")
    if not st.session_state.get("quiz_saved", True):
        st.error("Could not save your answers. The tracker will not see this attempt.")

    df = quiz.answers_frame(questions, answers)
    st.plotly_chart(impact_bars(df), width="stretch")

    st.subheader("Personalized Insights")
    for _, row in df.iterrows():
        st.markdown(f"**{row['question']}**")
        st.caption(row["tip"])

    c1, c2 = st.columns(2)
    with c1:
        st.button("Go to Tracker", type="primary", on_click=go_to, args=("Tracker",), width="stretch")
    with c2:
        if st.button("Retake Quiz", width="stretch"):
            st.session_state.quiz_submitted = False
            st.session_state.quiz_index = 0
            st.rerun()


# =========================
# 5) GAME
# =========================
def game_page():
    items = game.ITEMS
    ss = st.session_state
    if "game_state" not in ss:
        ss.game_state = game.GameState()
    state = ss.game_state

    header_block("Recyclable or Not?", "Guess whether each item belongs in the recycling bin.", "GAME")
    stat_card([("Score", f"{state.score} / {len(items)}")])

    feedback = game.last_feedback(state, items)
    if feedback:
        item, correct = feedback
        msg = f"{item.name}: {'recyclable' if item.recyclable else 'not recyclable'}. {item.info}"
        if correct:
            st.success(f"Correct! {msg}")
        else:
            st.error(f"Not quite. {msg}")

    item = game.current_item(state, items)
    if item is None:
        st.subheader(f"Final score: {state.score} / {len(items)}")
        if st.button("Play again"):
            ss.game_state = game.GameState()
            st.rerun()
        return

    st.markdown(f"""
    <div class="card" style="text-align:center;">
      <div style="font-size:4rem;">{item.icon}</div>
      <h3>{item.name}</h3>
    </div>
    """, unsafe_allow_html=True)
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Recyclable", width="stretch", key=f"yes_{item.id}"):
            ss.game_state = game.guess(state, items, True)
            st.rerun()
    with c2:
        if st.button("Not Recyclable", width="stretch", key=f"no_{item.id}"):
            ss.game_state = game.guess(state, items, False)
            st.rerun()


# =========================
# 6) TRACKER
# =========================
def _select(task_id):
    st.session_state.tracker_days = tracker.toggle_selection(st.session_state.tracker_days, task_id)

def _complete(task_id):
    st.session_state.tracker_days = tracker.toggle_completion(st.session_state.tracker_days, task_id)

def tracker_page():
    ss = st.session_state
    snapshot = store.load()
    if snapshot is None:
        logger.debug("No saved survey, sending user to the quiz")
        st.info("Please complete the survey first.")
        st.button("Go to Survey", on_click=retake_quiz)
        return

    if "tracker_days" not in ss or ss.get("tracker_snapshot") != snapshot:
        ss.tracker_days = tracker.start_tracker(snapshot)
        ss.tracker_snapshot = snapshot
    days = ss.tracker_days
    summary = tracker_summary(days)

    with st.container():
        st.markdown("#### Learn More About Your Impact")
        st.caption("Discover how your daily habits affect the environment.")
        if st.toggle("Learn More", key="show_impact"):
            trees = summary["trees"]
            st.success(f"Your efforts are equivalent to planting {trees} tree{'s' if trees != 1 else ''}!")

    stat_card([("Tasks Completed", f"{summary['progress']}%"), ("Streak", summary["streak"])], tag="TRACKER")
    st.button("Retake Survey", on_click=retake_quiz)

    st.subheader("Sustainability Tracker")
    for i, day in enumerate(days):
        editable = tracker.is_editable(days, i)
        with st.container(border=True):
            st.markdown(f"**Day {day.number}**")
            if editable and not day.confirmed:
                st.write("Select the challenges you want to complete today:")
                for task in day.tasks:
                    st.checkbox(task.description, value=task.selected, key=f"sel_{task.id}",
                                on_change=_select, args=(task.id,))
                if st.button("Submit Challenges", key=f"confirm_{day.number}"):
                    updated, ok = tracker.confirm_latest_day(ss.tracker_days)
                    if ok:
                        ss.tracker_days = updated
                        st.rerun()
                    st.warning("Please select at least one challenge for today.")
            else:
                for task in day.tasks:
                    st.checkbox(task.description, value=task.done, key=f"done_{task.id}",
                                disabled=not editable, on_change=_complete, args=(task.id,))

    if st.button("New Day", type="primary"):
        ss.tracker_days = tracker.add_day(ss.tracker_days, snapshot)
        st.rerun()

    df = days_frame(days)
    fig = completion_line(df[df["confirmed"]])
    if fig is not None:
        st.plotly_chart(fig, width="stretch")
        st.download_button("Export chart", data=figure_png(completion_bar_plot(df[df["confirmed"]])),
                           file_name="ecotrack_progress.png", mime="image/png")

    streak = summary["streak"]
    st.markdown("---")
    st.markdown(f"**Overall Completion: {summary['progress']}%**")
    st.caption(f"Streak: {streak} day{'s' if streak != 1 else ''}")


# =========================
# 7) APP UI
# =========================
st.title("EcoTrack")
st.caption("Impact quiz · recycling game · daily sustainability challenges")

if "page" not in st.session_state:
    st.session_state["page"] = "Quiz"

st.sidebar.markdown("### Navigate")
page = st.sidebar.radio("Screen", PAGES, key="page")

st.sidebar.markdown("---")
st.sidebar.markdown("### Quick help")
st.sidebar.write("• Take the quiz first; the tracker builds challenges from your answers.")
st.sidebar.write(f"• Answers stored in **{DB_URL}**")

if page == "Quiz":
    quiz_page()
elif page == "Game":
    game_page()
else:
    tracker_page()

st.markdown("---")
st.caption(f"Local DB: {DB_URL} · Personal tracking tool")
