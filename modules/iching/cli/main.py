from pathlib import Path
import argparse
import asyncio
import json
import random
import sys
import traceback
from typing import Optional

"""
I Ching coin casting - Main Entry Point.

Ask a question, cast six lines with three coins, and have the figure read by
the interpretation oracle.
"""


def find_project_root(start_path: Path) -> Path:
    """
    Walk up from start_path looking for a project marker.

    Markers: pyproject.toml, setup.py, .git, .project_root.
    Falls back to four levels up when none is found.
    """
    marker_files = ["pyproject.toml", "setup.py", ".git", ".project_root"]

    for parent in start_path.resolve().parents:
        for marker in marker_files:
            if (parent / marker).exists():
                return parent

    return start_path.parent.parent.parent.parent


# Add project root to sys.path so modules import when this file is run directly
if __name__ == "__main__":
    project_root = find_project_root(Path(__file__).resolve())
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

from modules.common.ui.formatting import prompt_user_input
from modules.common.ui.logging import log_error, log_info, log_success, log_warn
from modules.iching.cli.display import render_analysis, render_chart, render_progress
from modules.iching.core.coins import toss_coins
from modules.iching.core.divination import DivinationSession
from modules.iching.core.exceptions import GatewayError, SequenceError, ValidationError
from modules.iching.core.gateway import GeminiInterpretationGateway, InterpretationGateway
from modules.iching.core.image_generator import create_figure_image
from modules.iching.utils.helpers import clean_images_folder, ensure_utf8_stdout

INTERPRET = "interpret"
RETRY = "retry"
RESTART = "restart"
QUIT = "quit"


def ask_question(session: DivinationSession, question: Optional[str] = None) -> None:
    """Begin the session, re-prompting while the question is empty."""
    while True:
        if question is None:
            question = prompt_user_input("所测之事 (your question): ")
        try:
            session.begin(question)
            return
        except ValidationError as exc:
            log_warn(f"{exc}. Please enter a question.")
            question = None


def cast_figure(session: DivinationSession, rng: random.Random, auto: bool = False) -> None:
    """Toss three coins six times, bottom line first."""
    while not session.state.is_complete:
        position = session.state.next_position
        if not auto:
            prompt_user_input(f"Press Enter to toss line {position}...")
        session.cast_line(toss_coins(rng))
        print(render_progress(session.state))


def choose_after_cast() -> str:
    """Figure is complete: interpret it, start over or stop."""
    answer = prompt_user_input("[i]nterpret, [n]ew cast or [q]uit? ", default="i").lower()
    if answer.startswith("n"):
        return RESTART
    if answer.startswith("q"):
        return QUIT
    return INTERPRET


def choose_after_result() -> str:
    answer = prompt_user_input("[n]ew cast or [q]uit? ", default="q").lower()
    return RESTART if answer.startswith("n") else QUIT


def choose_after_failure() -> str:
    answer = prompt_user_input("[r]etry, [n]ew cast or [q]uit? ", default="r").lower()
    if answer.startswith("n"):
        return RESTART
    if answer.startswith("q"):
        return QUIT
    return RETRY


def save_result_json(session: DivinationSession, path: str) -> str:
    state = session.state
    payload = {
        "question": state.question,
        "lines": [
            {"position": line.position, "value": int(line.value), "coins": list(line.coins)}
            for line in state.cast_lines
        ],
        "interpretation": state.interpretation.to_dict() if state.interpretation else None,
    }
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    log_success(f"Saved reading to {output}")
    return str(output)


def run_session(
    session: DivinationSession,
    rng: random.Random,
    question: Optional[str] = None,
    auto: bool = False,
    interpret: bool = True,
    save_image: bool = False,
    save_json: Optional[str] = None,
) -> str:
    """
    Drive one session from question to reading.

    Returns:
        QUIT when finished, RESTART when the user asked for a new cast
    """
    ask_question(session, question)
    cast_figure(session, rng, auto=auto)

    if save_image:
        create_figure_image(session.state.cast_lines)

    if not interpret:
        return QUIT

    action = choose_after_cast()
    if action != INTERPRET:
        if action == RESTART:
            session.reset()
        return action

    while True:
        try:
            asyncio.run(session.request_interpretation())
            break
        except GatewayError:
            action = choose_after_failure()
            if action == RETRY:
                continue
            session.reset()
            return action

    figure = session.assemble()
    print(render_chart(figure))
    print()
    print(render_analysis(figure))

    if save_image:
        create_figure_image(session.state.cast_lines, filename="figure_annotated.png", figure=figure)
    if save_json:
        save_result_json(session, save_json)

    action = choose_after_result()
    if action == RESTART:
        session.reset()
    return action


def main(
    question: Optional[str] = None,
    seed: Optional[int] = None,
    auto: bool = False,
    interpret: bool = True,
    save_image: bool = False,
    save_json: Optional[str] = None,
    gateway: Optional[InterpretationGateway] = None,
) -> None:
    """
    Run the whole casting flow.

    Args:
        question: Question to ask; prompted when None
        seed: Seed for reproducible coin tosses
        auto: Toss without waiting for Enter
        interpret: Send the figure to the oracle
        save_image: Save the figure as PNG
        save_json: Path to save question, lines and reading as JSON
        gateway: Oracle adapter (Gemini when None)
    """
    ensure_utf8_stdout()
    log_info("=== 六爻神课 ===")

    if interpret and gateway is None:
        try:
            gateway = GeminiInterpretationGateway()
        except ValueError as exc:
            log_error(f"Cannot reach the interpretation service: {exc}")
            sys.exit(1)

    if save_image:
        try:
            deleted = clean_images_folder()
        except RuntimeError as exc:
            log_error(f"Cannot clean images folder: {exc}")
            sys.exit(1)
        if deleted:
            log_info(f"Removed {deleted} old figure image(s)")

    session = DivinationSession(gateway)
    rng = random.Random(seed)

    try:
        while True:
            action = run_session(
                session,
                rng,
                question=question,
                auto=auto,
                interpret=interpret,
                save_image=save_image,
                save_json=save_json,
            )
            if action != RESTART:
                break
            question = None
    except SequenceError as exc:
        log_error(f"Casting sequence error: {exc}")
        traceback.print_exc()
        sys.exit(1)
    except (EOFError, KeyboardInterrupt):
        log_warn("Interrupted")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="六爻 coin casting with an AI interpretation")
    parser.add_argument("--question", "-q", type=str, default=None, help="Question to ask (prompted if omitted)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible coin tosses")
    parser.add_argument("--auto", action="store_true", help="Toss all six lines without waiting for Enter")
    parser.add_argument("--no-interpret", action="store_true", help="Stop after the figure is cast")
    parser.add_argument("--save-image", action="store_true", help="Save the figure as a PNG image")
    parser.add_argument("--save-json", type=str, default=None, help="Save question, lines and reading to this path")
    return parser


if __name__ == "__main__":
    args = build_parser().parse_args()
    main(
        question=args.question,
        seed=args.seed,
        auto=args.auto,
        interpret=not args.no_interpret,
        save_image=args.save_image,
        save_json=args.save_json,
    )
