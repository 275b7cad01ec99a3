"""
Kudzidza - Shona Vocabulary Course

Streamlit front-end over the progress tracker: browse units, study a lesson's
words and phrases, work through its exercises, and review streaks and
achievements.

Usage:
    streamlit run app.py
"""

import streamlit as st

from kudzidza.classroom import (
    ContentCatalog,
    SqliteProgressStore,
    ProgressTracker,
    Navigator,
    ExerciseSession,
    LessonAvailability,
)
from kudzidza.config import get_settings, setup_logging


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Kudzidza",
    page_icon="🦁",
    layout="wide",
    initial_sidebar_state="expanded",
)

ACCURACY_COLORS = {"high": "#58CC02", "medium": "#FFC800", "low": "#FF4B4B"}


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Build the tracker once per browser session and keep it in session state."""
    if "tracker" not in st.session_state:
        settings = get_settings()
        setup_logging(settings.log_level)
        catalog = ContentCatalog.from_yaml(settings.course_path)
        store = SqliteProgressStore(settings.progress_db)
        tracker = ProgressTracker(catalog, store, key=settings.progress_key)
        st.session_state.tracker = tracker
        st.session_state.navigator = Navigator(tracker)
        # progress_version mirrors tracker.version for this browser session
        tracker.subscribe(lambda progress: st.session_state.update(progress_version=tracker.version))

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "home"  # home, lesson, exercise, profile

    if "lesson_id" not in st.session_state:
        st.session_state.lesson_id = None

    if "session" not in st.session_state:
        st.session_state.session = None

    if "last_answer" not in st.session_state:
        st.session_state.last_answer = None


def show(view_mode: str, lesson_id: str | None = None):
    """Switch the main view."""
    st.session_state.view_mode = view_mode
    if lesson_id is not None:
        st.session_state.lesson_id = lesson_id
    st.rerun()


# -----------------------------------------------------------------------------
# Sidebar: Stats and Course Tree
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with stats and the unit tree."""
    tracker = st.session_state.tracker
    nav = st.session_state.navigator
    progress = tracker.progress

    st.sidebar.title("🦁 Kudzidza")
    st.sidebar.markdown(f"🔥 **{progress.current_streak}** day streak &nbsp; ⭐ **{progress.total_xp}** XP")

    stats = nav.get_progress_summary()
    st.sidebar.progress(stats["completion_percent"] / 100)

    col1, col2 = st.sidebar.columns(2)
    with col1:
        if st.button("Home", use_container_width=True):
            show("home")
    with col2:
        if st.button("Profile", use_container_width=True):
            show("profile")

    st.sidebar.divider()
    for nav_unit in nav.get_navigation_tree():
        st.sidebar.markdown(f"**{nav_unit.title}** ({nav_unit.completed_count}/{nav_unit.total_count})")
        for nav_lesson in nav_unit.lessons:
            lesson = nav_lesson.lesson
            indicator = nav.get_status_indicator(lesson)
            if st.sidebar.button(
                f"{indicator} {lesson.title}",
                key=f"side_{lesson.id}",
                disabled=nav_lesson.availability == LessonAvailability.LOCKED,
                use_container_width=True,
            ):
                show("lesson", lesson.id)


# -----------------------------------------------------------------------------
# Home View
# -----------------------------------------------------------------------------

def render_home_view():
    """Units with their lessons, locked lessons greyed out."""
    nav = st.session_state.navigator
    st.title(st.session_state.tracker.catalog.title or "Learn Shona")

    recommended = nav.get_recommended_lesson()
    if recommended and st.button(f"Continue: {recommended.title}", type="primary"):
        show("lesson", recommended.id)

    for nav_unit in nav.get_navigation_tree():
        st.subheader(nav_unit.title)
        for nav_lesson in nav_unit.lessons:
            lesson = nav_lesson.lesson
            locked = nav_lesson.availability == LessonAvailability.LOCKED
            col1, col2 = st.columns([8, 2])
            with col1:
                label = f"{nav.get_status_indicator(lesson)} **{lesson.title}** · {lesson.xp_reward} XP"
                st.markdown(label if not locked else f"<span style='color: #999;'>{label}</span>",
                            unsafe_allow_html=True)
                st.caption(lesson.description)
            with col2:
                if st.button("Open", key=f"home_{lesson.id}", disabled=locked, use_container_width=True):
                    show("lesson", lesson.id)


# -----------------------------------------------------------------------------
# Lesson Detail View
# -----------------------------------------------------------------------------

def render_lesson_view():
    """Words and phrases for the selected lesson."""
    tracker = st.session_state.tracker
    lesson = tracker.catalog.get_lesson(st.session_state.lesson_id or "")
    if not lesson:
        st.info("Select a lesson from the sidebar to begin.")
        return

    st.title(lesson.title)
    st.markdown(lesson.description)

    if lesson.words:
        st.subheader("Words")
        for word in lesson.words:
            st.markdown(f"**{word.shona}** - {word.english}  \n_{word.pronunciation}_")

    if lesson.phrases:
        st.subheader("Phrases")
        for phrase in lesson.phrases:
            st.markdown(f"**{phrase.shona}** - {phrase.english}  \n_{phrase.pronunciation}_ · {phrase.context}")

    st.divider()
    label = "Practice again" if tracker.is_lesson_completed(lesson) else "Start lesson"
    if st.button(label, type="primary", use_container_width=True):
        st.session_state.session = ExerciseSession(lesson, tracker)
        st.session_state.last_answer = None
        show("exercise")


# -----------------------------------------------------------------------------
# Exercise View
# -----------------------------------------------------------------------------

def render_exercise_view():
    """Step through exercises, then record completion."""
    session = st.session_state.session
    if session is None:
        show("home")
        return

    st.progress(session.progress)

    exercise = session.current_exercise
    if exercise is None:
        render_lesson_complete(session)
        return

    st.caption(f"{session.position}/{session.total_questions} · {exercise.type.value}")
    st.subheader(exercise.question)

    result = st.session_state.last_answer
    if result is None:
        if exercise.is_choice_style:
            answer = st.radio("Choose an answer", exercise.options, key=f"answer_{exercise.id}")
        else:
            answer = st.text_input("Your answer", key=f"answer_{exercise.id}")
        if st.button("Check", type="primary", disabled=not answer):
            st.session_state.last_answer = session.submit_answer(answer)
            st.rerun()
    else:
        if result.is_correct:
            st.success("Correct!")
        else:
            st.error(f"Incorrect. Correct answer: {result.correct_answer}")
        if st.button("Continue", type="primary"):
            session.next_exercise()
            st.session_state.last_answer = None
            st.rerun()


def render_lesson_complete(session: ExerciseSession):
    """Lesson-complete screen: XP, accuracy and any new achievements."""
    completion = session.finish()

    st.title("Lesson Complete!")
    if completion is not None:
        st.markdown(f"### ⭐ +{completion.xp_earned} XP")
        st.markdown(f"🔥 Streak: {completion.current_streak} days")
        for achievement in completion.new_achievements:
            st.balloons()
            st.success(f"Achievement unlocked: **{achievement.title}** - {achievement.description}")
        if not completion.saved:
            st.warning("Progress could not be saved to disk. It is kept for this session.")

    color = ACCURACY_COLORS[session.accuracy_band]
    st.markdown(f"Correct answers: **{session.correct_answers}/{session.total_questions}**")
    st.markdown(f"Accuracy: <span style='color: {color}; font-weight: bold;'>{session.accuracy}%</span>",
                unsafe_allow_html=True)
    if session.is_perfect:
        st.markdown("👑 **Perfect Score!**")

    if st.button("Back to Lessons", type="primary"):
        st.session_state.session = None
        show("home")


# -----------------------------------------------------------------------------
# Profile View
# -----------------------------------------------------------------------------

def render_profile_view():
    """Stats and earned achievements."""
    progress = st.session_state.tracker.progress
    st.title("Profile")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("⭐ Total XP", progress.total_xp)
    col2.metric("🔥 Current Streak", f"{progress.current_streak} days")
    col3.metric("🏆 Longest Streak", f"{progress.longest_streak} days")
    col4.metric("📚 Lessons Completed", len(progress.completed_lessons))

    st.subheader("Achievements")
    if not progress.achievements:
        st.info("Complete lessons to earn achievements!")
    for achievement in progress.achievements:
        earned = achievement.unlocked_date.strftime("%Y-%m-%d") if achievement.unlocked_date else ""
        st.markdown(f"**{achievement.title}** - {achievement.description} ({earned})")


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    view_mode = st.session_state.view_mode
    if view_mode == "lesson":
        render_lesson_view()
    elif view_mode == "exercise":
        render_exercise_view()
    elif view_mode == "profile":
        render_profile_view()
    else:
        render_home_view()


if __name__ == "__main__":
    main()
