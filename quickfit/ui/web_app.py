"""NiceGUI web UI for QuickFit."""

from __future__ import annotations

from pathlib import Path

from nicegui import app, ui

from quickfit.ui.controller import WorkoutController
from quickfit.workout.library import DEFAULT_TEMPLATE_ID
from quickfit.workout.progress import DEFAULT_WEEK_START


def _fmt_clock(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


def run_web_ui(
    *,
    state_path: Path | None = None,
    week_start: int = DEFAULT_WEEK_START,
    host: str = "127.0.0.1",
    port: int = 8089,
) -> int:
    controller = WorkoutController(state_path=state_path, week_start=week_start)
    ui.add_head_html(
        """
        <style>
          .qf-card {
            border-radius: 14px;
            box-shadow: 0 8px 20px rgba(15, 23, 42, 0.12);
          }
          .qf-done { color: #16a34a; font-weight: 700; }
          .qf-muted { color: #6b7280; }
        </style>
        """
    )

    with ui.column().classes("w-full gap-4") as home_view:
        ui.label("QuickFit").classes("text-3xl font-bold")
        with ui.row().classes("w-full gap-4"):
            streak_label = ui.label("-").classes("text-xl font-semibold")
            total_label = ui.label("-").classes("text-xl font-semibold")
            weekly_label = ui.label("-").classes("text-xl font-semibold")
            time_label = ui.label("-").classes("text-xl font-semibold")
        today_label = ui.label("").classes("qf-muted")
        open_workout_btn = ui.button("Start today's workout")

    with ui.column().classes("w-full gap-4") as workout_view:
        with ui.row().classes("w-full items-center gap-2"):
            workout_back_btn = ui.button("Home")
            workout_title = ui.label("").classes("text-2xl font-bold")
            completed_badge = ui.label("Completed").classes("qf-done")
        workout_progress_label = ui.label("").classes("text-sm")
        workout_progress = ui.linear_progress(value=0.0, show_value=False)
        sections_box = ui.column().classes("w-full gap-3")
        with ui.row().classes("gap-2"):
            continue_btn = ui.button("Continue")
            restart_btn = ui.button("Restart workout")

    with ui.column().classes("w-full gap-4 items-center") as exercise_view:
        with ui.row().classes("w-full items-center gap-2"):
            exercise_back_btn = ui.button("Back")
            exercise_title = ui.label("").classes("text-2xl font-bold")
        phase_label = ui.label("").classes("text-lg qf-muted")
        countdown_label = ui.label("00:00").classes("text-6xl font-bold")
        phase_progress = ui.circular_progress(value=0.0, min=0.0, max=1.0, show_value=False)
        with ui.row().classes("gap-2"):
            play_btn = ui.button("Start")
            pause_btn = ui.button("Pause")
            reset_btn = ui.button("Reset")
            complete_btn = ui.button("Complete now")
        next_btn = ui.button("Next exercise")
        exercise_info = ui.label("").classes("text-sm qf-muted")

    def show(view: str) -> None:
        home_view.set_visibility(view == "home")
        workout_view.set_visibility(view == "workout")
        exercise_view.set_visibility(view == "exercise")

    def refresh_home() -> None:
        stats = controller.stats()
        streak_label.text = f"{stats.current_streak} day streak"
        total_label.text = f"{stats.total_workouts} workouts"
        weekly_label.text = f"{stats.this_week_completed}/{stats.weekly_goal} this week"
        time_label.text = f"{stats.total_time_spent} min"
        if controller.engine.did_workout_today():
            today_label.text = "Today's workout complete"
            open_workout_btn.set_text("View today's workout")
        else:
            today_label.text = ""
            open_workout_btn.set_text("Start today's workout")

    def rebuild_sections() -> None:
        session = controller.engine.state.session
        sections_box.clear()
        if session is None:
            return
        with sections_box:
            for s_idx, section in enumerate(session.template.sections):
                done, total = session.section_counts()[s_idx]
                with ui.card().classes("w-full qf-card"):
                    ui.label(section.title).classes("text-lg font-semibold")
                    ui.label(f"{done} of {total} completed").classes("text-sm qf-muted")
                    for e_idx, exercise in enumerate(section.exercises):
                        mark = "✓ " if session.completed[s_idx][e_idx] else ""
                        rest = f" + {exercise.rest} rest" if exercise.has_rest else ""
                        btn = ui.button(
                            f"{mark}{exercise.name} ({exercise.duration}{rest})",
                            on_click=lambda s=s_idx, x=e_idx: open_exercise(s, x),
                        ).props("flat align=left").classes("w-full")
                        if not controller.engine.is_navigable(s_idx, e_idx):
                            btn.disable()

    def refresh_workout() -> None:
        snapshot = controller.session_snapshot()
        if snapshot is None:
            return
        workout_title.text = snapshot.name
        completed_badge.set_visibility(snapshot.workout_completed)
        workout_progress_label.text = (
            f"{snapshot.completed_exercises}/{snapshot.total_exercises} exercises "
            f"({snapshot.progress_pct}%)"
        )
        workout_progress.value = snapshot.progress_pct / 100
        continue_btn.set_enabled(controller.engine.next_incomplete() is not None)

    def refresh_exercise() -> None:
        view = controller.current_view
        timer = controller.timer_snapshot()
        if view is None or timer is None:
            return
        exercise_title.text = view.exercise.name
        if timer.finished:
            phase_label.text = "Done"
        else:
            phase_label.text = "Rest" if timer.phase == "rest" else "Work"
        countdown_label.text = _fmt_clock(timer.remaining_sec)
        phase_progress.value = (
            1 - timer.remaining_sec / timer.phase_duration_sec
            if timer.phase_duration_sec
            else 1.0
        )
        play_btn.set_enabled(not timer.running and not timer.finished)
        pause_btn.set_enabled(timer.running)
        reset_btn.set_enabled(not timer.finished)
        complete_btn.set_enabled(not timer.finished)
        next_btn.set_visibility(timer.finished)
        next_btn.set_text(
            "Next exercise"
            if controller.engine.next_incomplete() is not None
            else "Complete workout"
        )
        exercise_info.text = (
            f"Exercise {view.exercise_index + 1} of {len(view.section.exercises)} "
            f"- {view.section.title}"
        )

    def refresh_ui() -> None:
        refresh_home()
        refresh_workout()
        refresh_exercise()

    def open_workout() -> None:
        controller.resume_or_start(DEFAULT_TEMPLATE_ID)
        rebuild_sections()
        refresh_workout()
        show("workout")

    def open_exercise(section_index: int, exercise_index: int) -> None:
        if controller.open_exercise(section_index, exercise_index) is None:
            ui.notify("Exercise not found", color="negative")
            return
        refresh_exercise()
        show("exercise")

    def on_home() -> None:
        controller.close_exercise()
        controller.engine.check_for_stale_sessions()
        refresh_home()
        show("home")

    def on_exercise_back() -> None:
        controller.close_exercise()
        rebuild_sections()
        refresh_workout()
        show("workout")

    def on_continue() -> None:
        position = controller.engine.next_incomplete()
        if position is not None:
            open_exercise(*position)

    def on_next() -> None:
        position = controller.next_exercise()
        if position is None:
            on_exercise_back()
            return
        open_exercise(*position)

    def on_restart() -> None:
        controller.start_workout(DEFAULT_TEMPLATE_ID)
        rebuild_sections()
        refresh_workout()

    open_workout_btn.on_click(open_workout)
    workout_back_btn.on_click(on_home)
    continue_btn.on_click(on_continue)
    restart_btn.on_click(on_restart)
    exercise_back_btn.on_click(on_exercise_back)
    play_btn.on_click(controller.start_timer)
    pause_btn.on_click(controller.pause_timer)
    reset_btn.on_click(controller.reset_timer)
    complete_btn.on_click(controller.complete_now)
    next_btn.on_click(on_next)

    app.on_disconnect(controller.close_exercise)
    app.on_shutdown(controller.close_exercise)

    controller.engine.check_for_stale_sessions()
    refresh_home()
    show("home")
    ui.timer(0.5, refresh_ui)
    ui.run(host=host, port=port, reload=False, title="QuickFit")
    return 0
