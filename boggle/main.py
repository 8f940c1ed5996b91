"""
Main entry point for playing a boggle round in the terminal.

Usage:
    python -m boggle.main --dictionary words.txt
    python -m boggle.main config.yaml --store scores.json --verbose

Type a word and press enter to submit it, or trace it tile by tile as
row,col pairs (e.g. "0,0 0,1 0,2"). Commands: :rules, :toggle RULE, :quit
"""

import argparse
import logging
import re
import sys
import threading
from pathlib import Path
from typing import List, Optional

import yaml

from .environment import RoundSession, RoundState, SessionConfig
from .utils.grid_visualizer import render_grid, render_state
from .verifiers import Grid, Position, RuleFlag, parse_flag
from .verifiers.rules import FLAG_NAMES

_TAP_PATTERN = re.compile(r'^\s*\d+\s*,\s*\d+(\s+\d+\s*,\s*\d+)*\s*$')
CLOCK_THREAD = "boggle-clock"


def load_config(config_path: str) -> SessionConfig:
    """Load session configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return SessionConfig(**data)


def parse_taps(text: str) -> List[Position]:
    """Parse "r,c r,c ..." into positions."""
    taps = []
    for pair in text.split():
        row, col = pair.split(',')
        taps.append(Position(int(row), int(col)))
    return taps


def describe_rules(flags: RuleFlag) -> str:
    return ', '.join(
        f"{name}={'on' if flag in flags else 'off'}" for name, flag in FLAG_NAMES.items()
    )


def run_clock(session: RoundSession, stop: threading.Event) -> None:
    """Tick the session once per second until the round ends or `stop` is set."""
    while not stop.wait(1.0):
        session.tick()
        if not session.is_active:
            break


def play(session: RoundSession, grid: Optional[Grid] = None, verbose: bool = False) -> RoundState:
    """Run one interactive round on stdin/stdout."""
    def on_event(event, state):
        if event == "ended":
            print("\nTime's up!")

    unsubscribe = session.subscribe(on_event)
    session.start_game(grid)
    stop = threading.Event()
    clock = threading.Thread(target=run_clock, args=(session, stop), name=CLOCK_THREAD, daemon=True)
    clock.start()

    print(render_state(session.state))
    try:
        while session.is_active:
            try:
                line = input("> ").strip()
            except EOFError:
                break
            if not session.is_active:
                break
            if not line:
                continue

            if line == ":quit":
                break
            if line == ":rules":
                print(f"Rules: {describe_rules(session.rule_flags)}")
                continue
            if line.startswith(":toggle"):
                try:
                    flag = parse_flag(line[len(":toggle"):])
                except ValueError as e:
                    print(e)
                    continue
                session.toggle(flag)
                print(f"Rules: {describe_rules(session.rule_flags)}")
                continue

            if _TAP_PATTERN.match(line):
                refused = [pos for pos in parse_taps(line) if not session.select(pos)]
                if refused:
                    print(f"Ignored taps: {', '.join(f'{r},{c}' for r, c in refused)}")
                if verbose and session.selection is not None:
                    print(render_grid(session.grid, session.selection.path))
                result = session.submit_selection()
            else:
                result = session.submit(line)

            if result is None:
                continue
            if result.accepted:
                bonus = f" (+{result.bonus} bonus)" if result.bonus else ""
                print(f"✓ {result.word}: +{result.points}{bonus}  score {result.score}")
            else:
                print(f"✗ {result.word}: {result.reason}")
    except KeyboardInterrupt:
        print("\nRound interrupted by user")
    finally:
        stop.set()
        clock.join(timeout=1.0)
        unsubscribe()

    return session.state


def main():
    parser = argparse.ArgumentParser(
        description="Play a round of boggle in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  rows: 4
  cols: 4
  duration: 180
  min_length: 3
  seed: 42
  dictionary_path: words.txt
  store_path: ~/.boggle.json
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--dictionary", "-d",
        help="Word list, one word per line"
    )
    parser.add_argument(
        "--store", "-s",
        help="JSON file for the high score and rule preferences"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for the grid"
    )
    parser.add_argument(
        "--duration",
        type=int,
        help="Round length in seconds"
    )
    parser.add_argument(
        "--toggle",
        action="append",
        default=[],
        metavar="RULE",
        help=f"Flip a rule for this run only ({', '.join(FLAG_NAMES)}); repeatable"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = load_config(args.config) if args.config else SessionConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    overrides = {
        "dictionary_path": args.dictionary,
        "store_path": args.store,
        "seed": args.seed,
        "duration": args.duration,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if updates:
        config = SessionConfig(**{**config.model_dump(), **updates})

    try:
        session = RoundSession.create(config=config)
    except FileNotFoundError as e:
        print(f"Error loading dictionary: {e}", file=sys.stderr)
        sys.exit(1)

    for name in args.toggle:
        try:
            session.toggle(parse_flag(name), persist=False)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    if args.verbose:
        print(f"Config: {args.config or '(defaults)'}")
        print(f"Rules: {describe_rules(session.rule_flags)}")
        print()

    state = play(session, verbose=args.verbose)

    # Print summary
    print()
    print("=== Round Summary ===")
    print(f"Words: {len(state.found_words)}")
    print(f"Score: {state.score}")
    print(f"High score: {state.high_score}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
