"""Interactive CLI application."""
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from loguru import logger

from hifz_tutor.catalog import QUICK_SELECTS, get_surah, surah_names, surahs_by_juz
from hifz_tutor.completion import progress_percent
from hifz_tutor.dashboard import (
    get_maintenance_stats, get_quality_color, get_quality_label, get_streak_message,
)
from hifz_tutor.db import DEFAULT_DB_PATH, DEFAULT_LOG_PATH, init_db
from hifz_tutor.learners import get_active_learner_id, get_rotation_cursor, get_streak_state
from hifz_tutor.maintenance import (
    apply_listen_tap, apply_recite_tap, finish_session, load_today,
    mark_practice_done, submit_assessment,
)
from hifz_tutor.memorization import (
    add_memorized_surahs, apply_quick_select, get_memorized_units, set_memorized_surahs,
)
from hifz_tutor.models import PRACTICE_CATEGORIES, Assessment, DailySession
from hifz_tutor.review import get_weak_passages, get_weakness_counts
from hifz_tutor.review_state import REPETITIONS, current_step
from hifz_tutor.rotation import DAILY_BATCH_SIZE, rotation_indices
from hifz_tutor.segmenter import build_master_list

console = Console()

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the learner leaves a session part-way through."""


def session_prompt(prompt: str, **kwargs) -> str:
    choices = kwargs.pop("choices", None)
    if choices is not None:
        kwargs["choices"] = list(choices) + [w for w in EXIT_WORDS if w not in choices]
        kwargs.setdefault("show_choices", False)
    value = Prompt.ask(prompt, **kwargs)
    if value.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return value


def session_int_prompt(prompt: str, choices: list[str]) -> int:
    return int(session_prompt(prompt, choices=choices))


def parse_surah_selection(text: str) -> list[int]:
    """Parse input like "1, 78-80, 112" into surah numbers."""
    numbers = set()
    for part in text.replace(" ", "").split(","):
        if not part:
            continue
        if "-" in part:
            start, end = part.split("-", 1)
            numbers.update(range(int(start), int(end) + 1))
        else:
            numbers.add(int(part))
    return sorted(numbers)


def parse_weaknesses(text: str) -> list[str] | None:
    """Match comma separated input against practice categories by prefix."""
    picked = []
    for part in text.lower().replace(" ", "").split(","):
        if not part:
            continue
        matches = [c for c in PRACTICE_CATEGORIES if c.startswith(part)]
        if len(matches) != 1:
            return None
        if matches[0] not in picked:
            picked.append(matches[0])
    return picked or None


def show_welcome():
    console.print(Panel(
        "[bold]Hifz Maintenance[/bold]\n[dim]Daily revision of what you have memorised[/dim]",
        title="Welcome", border_style="green",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("today", "Today's review session"),
        ("setup", "Choose memorised surahs"),
        ("plan", "View the rotation"),
        ("dashboard", "Streak + progress"),
        ("review", "Passages that need practice"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def _report(result) -> DailySession:
    if not result.accepted:
        console.print("[red]That step isn't available yet.[/red]")
    return result.session


def run_passage(db_path: str, session: DailySession, index: int) -> DailySession:
    """Walk one passage through listen, recite, assess and optional practice."""
    item = session.passages[index]
    console.print(Panel(
        f"[bold]{item.passage.label}[/bold]  [dim]ayat {item.passage.start_ayah}-{item.passage.end_ayah}[/dim]",
        title=f"Passage {index + 1}/{len(session.passages)}", border_style="cyan",
    ))
    while True:
        state = session.passages[index].state
        step = current_step(state)
        if step == "listening":
            answer = session_prompt(
                f"Listen {state.listen_count + 1}/{REPETITIONS} [dim](Enter when done, u to undo)[/dim]",
                default="", show_default=False,
            )
            n = state.listen_count if answer.strip().lower() == "u" else state.listen_count + 1
            if n == 0:
                continue
            session = _report(apply_listen_tap(db_path, session.id, index, n))
        elif step == "reciting":
            answer = session_prompt(
                f"Recite {state.recite_count + 1}/{REPETITIONS} from memory [dim](Enter when done, u to undo)[/dim]",
                default="", show_default=False,
            )
            if answer.strip().lower() == "u":
                if state.recite_count:
                    session = _report(apply_recite_tap(db_path, session.id, index, state.recite_count))
                else:
                    session = _report(apply_listen_tap(db_path, session.id, index, REPETITIONS))
                continue
            session = _report(apply_recite_tap(db_path, session.id, index, state.recite_count + 1))
        elif step == "assessing":
            outcome = session_prompt("How was your recitation?", choices=["smooth", "weak", "u"])
            if outcome == "u":
                session = _report(apply_recite_tap(db_path, session.id, index, REPETITIONS))
                continue
            if outcome == "smooth":
                assessment = Assessment.smooth()
            else:
                categories = None
                while categories is None:
                    categories = parse_weaknesses(session_prompt(
                        "Weak areas [dim](memorisation, fluency, understanding)[/dim]"
                    ))
                    if categories is None:
                        console.print("[red]Pick one or more of: memorisation, fluency, understanding[/red]")
                assessment = Assessment.weak(*categories)
            session = _report(submit_assessment(db_path, session.id, index, assessment))
        elif step == "remediating":
            outstanding = sorted(state.assessment.weaknesses - state.practice_done)
            for category in outstanding:
                if session_prompt(f"Practise {category} now?", choices=["y", "n"], default="n") == "y":
                    session = _report(mark_practice_done(db_path, session.id, index, category))
            break
        else:
            break
    quality = session.passages[index].state.quality
    color = get_quality_color(quality)
    console.print(f"[{color}]{get_quality_label(quality)}[/{color}]\n")
    return session


def cmd_today(db_path: str, learner_id: int):
    session = load_today(db_path, learner_id)
    streak = get_streak_state(db_path, learner_id)
    console.print(Panel(
        f"Streak: [bold]{streak.current_streak}[/bold] days  |  Best: {streak.longest_streak}\n"
        f"Progress: {session.tasks_completed}/{session.total_tasks} passages ({progress_percent(session)}%)",
        title=f"Daily Review {session.session_date}",
    ))
    already_completed = session.is_completed
    if already_completed:
        console.print(f"[green]Today's review is complete. {get_streak_message(streak.current_streak)}[/green]")
    for index in range(len(session.passages)):
        if current_step(session.passages[index].state) == "complete":
            continue
        session = run_passage(db_path, session, index)
    if already_completed:
        return
    session = finish_session(db_path, session.id)
    if session.is_completed:
        streak = get_streak_state(db_path, learner_id)
        console.print(f"[green]Session complete! {get_streak_message(streak.current_streak)}[/green]")


def cmd_setup(db_path: str, learner_id: int):
    names = surah_names()
    while True:
        memorized = get_memorized_units(db_path, learner_id)
        console.print(f"\n[bold]Memorised:[/bold] {len(memorized)} surahs")
        if memorized:
            console.print("  " + ", ".join(f"{n} {names[n]}" for n in memorized))
        action = Prompt.ask("Action", choices=["preset", "juz", "add", "remove", "clear", "done"], default="done")
        if action == "done":
            return
        if action == "clear":
            set_memorized_surahs(db_path, learner_id, [])
        elif action == "preset":
            presets = list(QUICK_SELECTS)
            for i, label in enumerate(presets, 1):
                console.print(f"  [cyan]{i}[/cyan]) {label}")
            choice = session_int_prompt("Preset", choices=[str(i) for i in range(1, len(presets) + 1)])
            apply_quick_select(db_path, learner_id, presets[choice - 1])
        elif action == "juz":
            by_juz = surahs_by_juz()
            juz = session_int_prompt("Juz (1-30)", choices=[str(j) for j in sorted(by_juz)])
            surahs = by_juz[juz]
            console.print("  " + ", ".join(f"{n} {names[n]}" for n in surahs))
            if Prompt.ask(f"Add all {len(surahs)}?", choices=["y", "n"], default="y") == "y":
                add_memorized_surahs(db_path, learner_id, surahs)
        else:
            try:
                numbers = parse_surah_selection(Prompt.ask("Surah numbers (e.g. 1, 78-114)"))
            except ValueError:
                console.print("[red]Use numbers and ranges like 1, 78-114.[/red]")
                continue
            unknown = [n for n in numbers if get_surah(n) is None]
            if unknown:
                console.print(f"[red]No such surah: {unknown}[/red]")
                continue
            current = set(memorized)
            current = current | set(numbers) if action == "add" else current - set(numbers)
            set_memorized_surahs(db_path, learner_id, current)


def cmd_plan(db_path: str, learner_id: int):
    master = build_master_list(get_memorized_units(db_path, learner_id))
    cursor = get_rotation_cursor(db_path, learner_id)
    upcoming = rotation_indices(len(master), cursor, DAILY_BATCH_SIZE)
    table = Table(title="Review Rotation")
    table.add_column("#", justify="right")
    table.add_column("Passage")
    table.add_column("Ayat", justify="right")
    table.add_column("")
    for i, passage in enumerate(master):
        marker = "[cyan]next[/cyan]" if i in upcoming else ""
        table.add_row(str(i + 1), passage.label, f"{passage.start_ayah}-{passage.end_ayah}", marker)
    console.print(table)


def cmd_dashboard(db_path: str, learner_id: int):
    stats = get_maintenance_stats(db_path, learner_id)
    console.print(Panel(
        f"[bold]{stats['current_streak']}[/bold] day streak  |  Best: {stats['longest_streak']}\n"
        f"[dim]{get_streak_message(stats['current_streak'])}[/dim]",
        title="Maintenance Dashboard", border_style="green",
    ))
    console.print(f"\n  Sessions: [bold]{stats['total_sessions']}[/bold]  |  "
                  f"Memorised: [bold]{stats['memorized_count']}[/bold] surahs  |  "
                  f"Rotation: [bold]{stats['rotation_cursor'] + 1}/{stats['rotation_length']}[/bold]  |  "
                  f"Avg quality: [bold]{stats['avg_quality']}[/bold]")


def cmd_review(db_path: str, learner_id: int):
    console.print("\n[bold]Passages That Need Practice[/bold]\n")
    weak = get_weak_passages(db_path, learner_id, limit=10)
    if not weak:
        console.print("[green]No weak passages recorded. Keep it up![/green]")
        return
    table = Table()
    table.add_column("Date")
    table.add_column("Passage")
    table.add_column("Weak areas")
    table.add_column("Still to practise")
    for w in weak:
        table.add_row(w["session_date"], w["label"], ", ".join(w["weaknesses"]), ", ".join(w["outstanding"]))
    console.print(table)
    counts = get_weakness_counts(db_path, learner_id)
    console.print("  " + "  |  ".join(f"{c}: [bold]{n}[/bold]" for c, n in counts.items()))


def configure_logging(log_path: str = DEFAULT_LOG_PATH) -> None:
    logger.remove()
    logger.add(log_path, rotation="1 MB", retention=3, level="INFO")


def main():
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    configure_logging()
    learner_id = get_active_learner_id(db_path)

    show_welcome()

    commands = {
        "today": cmd_today,
        "setup": cmd_setup,
        "plan": cmd_plan,
        "dashboard": cmd_dashboard,
        "review": cmd_review,
    }
    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        try:
            if choice in commands:
                commands[choice](db_path, learner_id)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]May Allah make it firm in your heart.[/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except SessionExitRequested:
            console.print("[dim]Progress saved. Pick up where you left off any time.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception(f"Command {choice!r} failed")
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
