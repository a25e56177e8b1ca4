# main.py
import sys
import json
import time
import logging
from pathlib import Path
from typing import Dict, List, Optional

from termspotter.Configuration import ConfigurationError, load_config
from termspotter.LectureSession import LectureSession
from termspotter.LoggingSetup import setup_logging
from termspotter.display.DefinitionFormatter import format_definition, format_recent_terms
from termspotter.types import SurfacedTerm, TranscriptionFragment

APP_DIR = Path(__file__).resolve().parent
LOGS_DIR = APP_DIR / "logs"
DEFAULT_CONFIG_PATH = APP_DIR / "config" / "termspotter_config.json"

USAGE = "usage: main.py --terms=TERMS.json --transcript=LECTURE.txt [--config=CONFIG.json] [--interval=SECONDS] [-v]"


class ConsoleDisplay:
    """Prints display events to stdout."""

    def __init__(self, max_definition_chars: int = 100) -> None:
        self.max_definition_chars = max_definition_chars

    def on_term_surfaced(self, term: SurfacedTerm) -> None:
        print(format_definition(term, self.max_definition_chars))
        print()

    def on_display_cleared(self) -> None:
        print("(display cleared)")
        print()


def parse_args(argv: List[str]) -> Dict[str, Optional[str]]:
    """
    Parses --name=value flags and -v.

    Args:
        argv: Arguments without the program name

    Returns:
        Dictionary with terms, transcript, config, interval and verbose keys

    Raises:
        ValueError: unknown argument or missing required flag
    """
    args: Dict[str, Optional[str]] = {
        "terms": None,
        "transcript": None,
        "config": None,
        "interval": "0.5",
        "verbose": None,
    }
    for arg in argv:
        if arg == "-v":
            args["verbose"] = "1"
        elif arg.startswith("--") and "=" in arg:
            name, value = arg[2:].split("=", 1)
            if name not in args or name == "verbose":
                raise ValueError(f"Unknown argument: {arg}")
            args[name] = value
        else:
            raise ValueError(f"Unknown argument: {arg}")

    if not args["terms"] or not args["transcript"]:
        raise ValueError("--terms and --transcript are required")
    return args


def load_terms(path: Path) -> Dict[str, str]:
    """
    Loads a {term: definition} JSON object.

    Raises:
        ValueError: file does not contain a JSON object
    """
    with open(path, 'r', encoding='utf-8') as f:
        terms = json.load(f)
    if not isinstance(terms, dict):
        raise ValueError(f"Terms file must contain a JSON object: {path}")
    return terms


def read_transcript(path: Path) -> List[TranscriptionFragment]:
    """
    Reads one fragment per line. Lines starting with '~' are partials,
    other non-blank lines are finals.
    """
    fragments: List[TranscriptionFragment] = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            text = line.strip()
            if not text:
                continue
            if text.startswith("~"):
                fragments.append(TranscriptionFragment(text=text[1:].strip(), is_final=False))
            else:
                fragments.append(TranscriptionFragment(text=text, is_final=True))
    return fragments


def replay(session: LectureSession, fragments: List[TranscriptionFragment], interval: float = 0.0) -> int:
    """
    Feeds fragments to the session in order.

    Returns:
        Number of surfaced terms
    """
    surfaced_count = 0
    for fragment in fragments:
        if session.on_transcription_fragment(fragment.text, fragment.is_final) is not None:
            surfaced_count += 1
        if interval > 0:
            time.sleep(interval)
    return surfaced_count


if __name__ == "__main__":
    session = None
    try:
        args = parse_args(sys.argv[1:])
        verbose = args["verbose"] is not None

        setup_logging(LOGS_DIR, verbose=verbose)

        config_path = args["config"] or (DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None)
        config = load_config(config_path)

        session = LectureSession(config=config, verbose=verbose)
        session.subscribe(ConsoleDisplay(config["display"]["max_definition_chars"]))

        session.on_lecture_start()
        session.set_term_index(load_terms(Path(args["terms"])))

        fragments = read_transcript(Path(args["transcript"]))
        surfaced = replay(session, fragments, interval=float(args["interval"]))

        print(format_recent_terms(session.recent_terms()))
        print(f"\n{surfaced} terms surfaced from {len(fragments)} fragments")

        session.on_lecture_stop()
        session.close()
    except KeyboardInterrupt:
        logging.info("Interrupted by user.")
        if session:
            session.close()
        sys.exit(0)
    except (ValueError, OSError, ConfigurationError) as e:
        logging.error(f"ERROR: {type(e).__name__}: {e}")
        print(f"{e}\n{USAGE}", file=sys.stderr)
        if session:
            session.close()
        sys.exit(1)
