#!/usr/bin/env python3
"""Simulate a learner studying one section over several days.

Runs the full loop in memory without any storage:
1. Select a session (due, new, fallback tiers)
2. Answer each word with a simulated recall probability
3. Record the review (quality mapping + SM-2)
4. Advance the clock a day and repeat

Run: uv run python scripts/simulate_study.py --days 14 --verbose
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
import random

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
import simple_parsing as sp

from wordwise.config import Config
from wordwise.models import Answer, MemoryState, Word
from wordwise.scheduling.progress import (
    daily_progress,
    rank_due_words,
    session_accuracy,
    summarize_section,
    update_streak,
)
from wordwise.scheduling.review import record_review
from wordwise.scheduling.selector import select_session


@dataclass
class Args:
    """Simulate spaced repetition study for one section."""

    days: int = 10  # Number of simulated study days
    section_size: int = 25  # Words in the section
    recall_rate: float = 0.8  # Chance of answering a word correctly
    seed: int = 7  # Random seed for reproducible runs
    verbose: bool = False  # Show every session's words


console = Console()

SAMPLE_WORDS = [
    ("hola", "hello"), ("gracias", "thank you"), ("perro", "dog"), ("gato", "cat"),
    ("casa", "house"), ("agua", "water"), ("libro", "book"), ("comer", "to eat"),
    ("beber", "to drink"), ("ciudad", "city"), ("rojo", "red"), ("verde", "green"),
    ("noche", "night"), ("día", "day"), ("amigo", "friend"), ("trabajo", "work"),
    ("tiempo", "time / weather"), ("calle", "street"), ("mesa", "table"), ("silla", "chair"),
    ("ventana", "window"), ("puerta", "door"), ("leche", "milk"), ("pan", "bread"),
    ("cielo", "sky"), ("mar", "sea"), ("sol", "sun"), ("luna", "moon"),
]


def build_section(size: int) -> list[Word]:
    """Build a section from the sample vocabulary, numbering past its end."""
    words = []
    for index in range(size):
        text, translation = SAMPLE_WORDS[index % len(SAMPLE_WORDS)]
        if index >= len(SAMPLE_WORDS):
            text = f"{text} ({index // len(SAMPLE_WORDS) + 1})"
        words.append(Word(id=index + 1, text=text, translation=translation, section_id=1))
    return words


def simulate_answer(rng: random.Random, recall_rate: float, attempts: int) -> Answer:
    """Draw a simulated answer; later attempts in a session are a bit easier."""
    is_correct = rng.random() < min(1.0, recall_rate + 0.1 * (attempts - 1))
    return Answer(
        is_correct=is_correct,
        response_time_ms=rng.randint(800, 10000),
        attempts_this_session=attempts,
    )


def run_day(
    words: list[Word],
    states: dict[int, MemoryState],
    now: datetime,
    config: Config,
    rng: random.Random,
    recall_rate: float,
    verbose: bool,
) -> tuple[int, int]:
    """Study one session and write back the new states. Returns (studied, correct)."""
    session = select_session(words, states, config.session_limit, now, learner_id=1)
    studied = correct = 0

    for session_word in session:
        attempts = 1
        while True:
            answer = simulate_answer(rng, recall_rate, attempts)
            outcome = record_review(
                states.get(session_word.word_id),
                answer,
                now,
                learner_id=1,
                word_id=session_word.word_id,
                config=config,
            )
            states[session_word.word_id] = outcome.state
            studied += 1
            correct += int(answer.is_correct)

            if verbose:
                mark = "[green]✓[/green]" if answer.is_correct else "[red]✗[/red]"
                console.print(
                    f"  {mark} {session_word.word.text} [dim]({session_word.tier})[/dim] "
                    f"q={int(outcome.quality)} interval={outcome.state.interval}d "
                    f"EF={outcome.state.easiness_factor:.2f}"
                )
            # Missed words are retried once within the session
            if answer.is_correct or attempts >= 2:
                break
            attempts += 1

    return studied, correct


def show_final_state(
    words: list[Word],
    states: dict[int, MemoryState],
    now: datetime,
    config: Config,
) -> None:
    """Display the learner's memory state for every word."""
    table = Table(title="Memory State")
    table.add_column("Word", style="cyan")
    table.add_column("Reps", justify="right")
    table.add_column("Interval", justify="right")
    table.add_column("EF", justify="right")
    table.add_column("Seen", justify="right")
    table.add_column("Next review", style="yellow")
    table.add_column("Learned", style="green")

    for word in words:
        state = states.get(word.id)
        if state is None:
            table.add_row(word.text, "-", "-", "-", "0", "never seen", "")
            continue
        table.add_row(
            word.text,
            str(state.repetition),
            f"{state.interval}d",
            f"{state.easiness_factor:.2f}",
            str(state.times_seen),
            state.next_review_date.strftime("%Y-%m-%d") if state.next_review_date else "-",
            "✓" if state.is_learned else "",
        )

    console.print(table)

    summary = summarize_section([word.id for word in words], states, now)
    console.print(
        f"Learned {summary.learned_words}/{summary.total_words}, "
        f"due {summary.due_words}, never seen {summary.new_words}, "
        f"complete: {summary.is_complete}"
    )

    urgent = rank_due_words(states.values(), now, max_words=config.review_rank_limit)
    if urgent:
        by_id = {word.id: word for word in words}
        console.print(
            "Most urgent reviews: "
            + ", ".join(by_id[state.word_id].text for state in urgent)
        )


def main() -> None:
    args = sp.parse(Args)
    config = Config.from_env()
    config.configure_logging()

    console.print(Panel(
        "[bold blue]Spaced Repetition Simulation[/bold blue]\n"
        f"{args.section_size} words, {args.days} days, "
        f"session limit {config.session_limit}, recall rate {args.recall_rate:.0%}",
        title="wordwise"
    ))

    rng = random.Random(args.seed)
    words = build_section(args.section_size)
    states: dict[int, MemoryState] = {}
    now = datetime(2024, 1, 1, 9, 0)
    streak = longest = 0
    last_session: datetime | None = None

    for day in range(1, args.days + 1):
        console.rule(f"[bold]Day {day} ({now:%Y-%m-%d})")
        studied, correct = run_day(
            words, states, now, config, rng, args.recall_rate, args.verbose
        )
        console.print(
            f"Answered {studied}, correct {correct} "
            f"([green]{session_accuracy(studied, correct)}%[/green]), "
            f"daily target {daily_progress(studied, config.daily_target):.0f}%"
        )
        if studied:
            streak, longest = update_streak(streak, longest, last_session, now)
            last_session = now
        console.print(f"Streak {streak} day(s), longest {longest}")
        now += timedelta(days=1)

    show_final_state(words, states, now, config)
    console.print(Panel("[bold green]Simulation complete!", title="Done"))


if __name__ == "__main__":
    main()
