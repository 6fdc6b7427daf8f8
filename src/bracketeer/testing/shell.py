"""Interactive shell for running a competition by hand.

The shell drives a live :class:`~bracketeer.tournament.Competition`: enroll a
field, start regulation play, pair rounds, enter results, undo a round to
correct a result, cut to a playoff and read the standings.
"""

# Bracketeer
# Copyright (C) 2025  Bracketeer developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import shlex
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from bracketeer.constants import TB_MATCH_POINTS, TIEBREAK_NAMES, TIEBREAK_ORDER
from bracketeer.exceptions import BracketeerException, CompetitionStateException
from bracketeer.models import EliminationRule, PairingDiscipline, ScoringMode
from bracketeer.models.competition import Round
from bracketeer.participant import Participant
from bracketeer.tournament import Competition
from bracketeer.tournament.standings import StandingsEntry
from bracketeer.utils import setup_logger

logger = setup_logger(__name__)

Writer = Callable[[str, str], None]

SHELL_STYLE = Style.from_dict(
    {
        "prompt": "#00aa00 bold",
        "heading": "bold",
        "ok": "#00aa00",
        "error": "#cc0000",
        "muted": "#888888",
    }
)

NEW_OPTIONS = {
    "elimination": EliminationRule,
    "discipline": PairingDiscipline,
    "scoring": ScoringMode,
}

# Command name -> (usage, description)
SHELL_COMMANDS: Dict[str, Tuple[str, str]] = {
    "new": (
        "new <name> [elimination=..] [discipline=..] [scoring=..] [seed=N]",
        "Create a competition",
    ),
    "add": ("add <first name> [last name]", "Enroll one participant"),
    "field": ("field <count>", "Enroll numbered participants"),
    "start": ("start", "Start regulation play"),
    "round": ("round", "Pair the next round"),
    "pairings": ("pairings [round]", "Show the matches of a round"),
    "result": ("result <match> <value>...", "Record a result in the current round"),
    "clear": ("clear <match>", "Clear a result in the current round"),
    "undo": ("undo", "Remove the current round"),
    "drop": ("drop <participant id>", "Deactivate a participant"),
    "readmit": ("readmit <participant id>", "Reactivate a participant"),
    "playoff": ("playoff [cut]", "Start playoff play, seeding the top <cut>"),
    "standings": ("standings [rows]", "Show the standings table"),
    "help": ("help [command]", "Show commands, or the usage of one command"),
    "exit": ("exit", "Leave the shell"),
}

EXIT_WORDS = ("exit", "quit", "q")


def format_standings(
    entries: Sequence[StandingsEntry], limit: Optional[int] = None
) -> List[str]:
    """Render standings rows as fixed-width text lines, header first."""
    widths = [len(TIEBREAK_NAMES[key]) for key in TIEBREAK_ORDER]
    header = f"{'#':>3}  {'Name':24}" + "".join(
        f"  {TIEBREAK_NAMES[key]:>{width}}"
        for key, width in zip(TIEBREAK_ORDER, widths)
    )
    lines = [header]
    for entry in entries[:limit]:
        cells = []
        for key, width in zip(TIEBREAK_ORDER, widths):
            value = entry.tiebreak(key)
            if key == TB_MATCH_POINTS:
                cells.append(f"  {value:>{width}}")
            else:
                cells.append(f"  {value:>{width}.2%}")
        lines.append(f"{entry.rank:>3}  {entry.participant.name:24}" + "".join(cells))
    return lines


def _print_styled(text: str, style: str = "") -> None:
    print_formatted_text(FormattedText([(style, text)]), style=SHELL_STYLE)


class CompetitionShell:
    """Line-oriented command interpreter over a single competition.

    Args:
        write: Output callback taking the text and a style class name;
            defaults to styled terminal output
    """

    def __init__(self, write: Optional[Writer] = None) -> None:
        self.write: Writer = write or _print_styled
        self.competition: Optional[Competition] = None
        self.handlers: Dict[str, Callable[[List[str]], None]] = {
            "new": self.do_new,
            "add": self.do_add,
            "field": self.do_field,
            "start": self.do_start,
            "round": self.do_round,
            "pairings": self.do_pairings,
            "result": self.do_result,
            "clear": self.do_clear,
            "undo": self.do_undo,
            "drop": self.do_drop,
            "readmit": self.do_readmit,
            "playoff": self.do_playoff,
            "standings": self.do_standings,
            "help": self.do_help,
        }

    # ========== Dispatch ==========

    def execute(self, line: str) -> bool:
        """Run one command line.

        Returns:
            False when the shell should stop, True otherwise
        """
        try:
            words = shlex.split(line)
        except ValueError as e:
            self.write(f"Error: {e}", "class:error")
            return True
        if not words:
            return True

        command, args = words[0].lower(), words[1:]
        if command in EXIT_WORDS:
            return False

        handler = self.handlers.get(command)
        if handler is None:
            self.write(
                f"Unknown command: {command}. Type 'help' for the command list",
                "class:error",
            )
            return True

        try:
            handler(args)
        except (BracketeerException, ValueError) as e:
            logger.debug(f"Command '{line}' failed: {e}")
            self.write(f"Error: {e}", "class:error")
        return True

    def require_competition(self) -> Competition:
        if self.competition is None:
            raise CompetitionStateException(
                "No competition yet. Create one with 'new <name>'"
            )
        return self.competition

    # ========== Commands ==========

    def do_new(self, args: List[str]) -> None:
        name_parts = []
        settings: Dict[str, object] = {}
        seed = None
        for arg in args:
            key, sep, value = arg.partition("=")
            if not sep:
                name_parts.append(arg)
            elif key == "seed":
                seed = int(value)
            elif key in NEW_OPTIONS:
                settings[key] = NEW_OPTIONS[key](value.lower())
            else:
                raise ValueError(f"Unknown option '{key}'")
        if not name_parts:
            raise ValueError("Usage: " + SHELL_COMMANDS["new"][0])

        self.competition = Competition(
            " ".join(name_parts),
            elimination_rule=settings.get("elimination", EliminationRule.NONE),
            pairing_discipline=settings.get("discipline", PairingDiscipline.SWISS),
            scoring_mode=settings.get("scoring", ScoringMode.HEAD_TO_HEAD),
            random_seed=seed,
        )
        config = self.competition.config
        self.write(
            f"Created {config.name}: {config.elimination_rule} elimination, "
            f"{config.pairing_discipline} pairing, {config.scoring_mode} scoring",
            "class:ok",
        )

    def do_add(self, args: List[str]) -> None:
        competition = self.require_competition()
        if not args:
            raise ValueError("Usage: " + SHELL_COMMANDS["add"][0])
        participant = Participant(args[0], " ".join(args[1:]))
        competition.add_participant(participant)
        self.write(f"Enrolled {participant.name} as {participant.id}", "class:ok")

    def do_field(self, args: List[str]) -> None:
        competition = self.require_competition()
        if len(args) != 1:
            raise ValueError("Usage: " + SHELL_COMMANDS["field"][0])
        count = int(args[0])
        first = competition.participant_count + 1
        for number in range(first, first + count):
            competition.add_participant(
                Participant(f"Player{number}", participant_id=f"p{number}")
            )
        self.write(
            f"Enrolled {count} participants ({competition.participant_count} total)",
            "class:ok",
        )

    def do_start(self, args: List[str]) -> None:
        segment = self.require_competition().create_regulation_phase()
        self.write(
            f"Regulation play started with {len(segment.participants)} participants",
            "class:ok",
        )

    def do_round(self, args: List[str]) -> None:
        self.show_round(self.require_competition().create_next_round())

    def do_pairings(self, args: List[str]) -> None:
        competition = self.require_competition()
        if args:
            self.show_round(competition.get_round(int(args[0])))
        else:
            self.show_round(competition.current_round)

    def do_result(self, args: List[str]) -> None:
        competition = self.require_competition()
        if len(args) < 2:
            raise ValueError("Usage: " + SHELL_COMMANDS["result"][0])
        round_data = competition.current_round
        match = competition.record_result(
            round_data.round_number,
            self._match_index(round_data, args[0]),
            [int(v) for v in args[1:]],
        )
        self.write(f"Recorded {match!r}", "class:ok")
        remaining = competition.outstanding_result_count
        if remaining:
            self.write(f"{remaining} result(s) outstanding", "class:muted")
        else:
            self.write(f"Round {round_data.round_number} is complete", "class:ok")

    def do_clear(self, args: List[str]) -> None:
        competition = self.require_competition()
        if len(args) != 1:
            raise ValueError("Usage: " + SHELL_COMMANDS["clear"][0])
        round_data = competition.current_round
        match = competition.clear_result(
            round_data.round_number, self._match_index(round_data, args[0])
        )
        self.write(f"Cleared {match!r}", "class:ok")

    def do_undo(self, args: List[str]) -> None:
        competition = self.require_competition()
        round_data = competition.remove_current_round()
        self.write(f"Removed round {round_data.round_number}", "class:ok")
        if round_data.eliminated:
            names = ", ".join(p.name for p in round_data.eliminated)
            self.write(f"Active again: {names}", "class:muted")

    def do_drop(self, args: List[str]) -> None:
        competition = self.require_competition()
        participant = competition.get_participant(self._single_id(args, "drop"))
        competition.deactivate_participant(participant)
        self.write(f"{participant.name} is inactive", "class:ok")

    def do_readmit(self, args: List[str]) -> None:
        competition = self.require_competition()
        participant = competition.get_participant(self._single_id(args, "readmit"))
        competition.reactivate_participant(participant)
        self.write(f"{participant.name} is active again", "class:ok")

    def do_playoff(self, args: List[str]) -> None:
        competition = self.require_competition()
        cut = int(args[0]) if args else None
        segment = competition.create_playoff_phase(cut)
        names = ", ".join(p.name for p in segment.participants)
        self.write(f"Playoff field: {names}", "class:ok")

    def do_standings(self, args: List[str]) -> None:
        competition = self.require_competition()
        limit = int(args[0]) if args else None
        lines = format_standings(competition.standings_table(), limit)
        self.write(lines[0], "class:heading")
        for line in lines[1:]:
            self.write(line, "")

    def do_help(self, args: List[str]) -> None:
        if args:
            command = args[0].lower()
            if command not in SHELL_COMMANDS:
                raise ValueError(f"Unknown command: {command}")
            usage, description = SHELL_COMMANDS[command]
            self.write(usage, "class:heading")
            self.write(f"  {description}", "")
            return
        self.write("Commands:", "class:heading")
        for command, (_, description) in SHELL_COMMANDS.items():
            self.write(f"  {command:10} {description}", "")

    # ========== Output ==========

    def show_round(self, round_data: Round) -> None:
        self.write(
            f"Round {round_data.round_number} ({round_data.pairing_discipline} "
            f"pairing, {round_data.match_count} matches)",
            "class:heading",
        )
        for number, match in enumerate(round_data.matches, start=1):
            names = " vs ".join(p.name for p in match.participants)
            if match.is_bye:
                names += " (bye)"
            result = "-".join(str(v) for v in match.results) or "pending"
            self.write(f"  {number:>3}. {names}  [{result}]", "")
        if round_data.eliminated:
            names = ", ".join(p.name for p in round_data.eliminated)
            self.write(f"  Eliminated: {names}", "class:muted")

    def prompt_message(self) -> FormattedText:
        if self.competition is None:
            label = "bracketeer"
        else:
            label = f"{self.competition.name} r{self.competition.round_count}"
        return FormattedText([("class:prompt", f"{label}> ")])

    @staticmethod
    def _match_index(round_data: Round, number: str) -> int:
        """Match index for a match number as shown by the shell, from 1."""
        index = int(number) - 1
        if not 0 <= index < round_data.match_count:
            raise ValueError(
                f"Round {round_data.round_number} has no match {number}"
            )
        return index

    @staticmethod
    def _single_id(args: List[str], command: str) -> str:
        if len(args) != 1:
            raise ValueError("Usage: " + SHELL_COMMANDS[command][0])
        return args[0]

    # ========== Interactive loop ==========

    def create_completer(self) -> NestedCompleter:
        """Complete command names, and option words after ``new``."""
        option_words = [
            f"{key}={member.value}"
            for key, enum_type in NEW_OPTIONS.items()
            for member in enum_type
        ]
        completions = {command: None for command in SHELL_COMMANDS}
        completions["new"] = WordCompleter(option_words + ["seed="])
        completions["help"] = WordCompleter(list(SHELL_COMMANDS))
        return NestedCompleter.from_nested_dict(completions)

    def run(self) -> int:
        """Read and execute commands until 'exit' or end of input."""
        session = PromptSession(
            completer=self.create_completer(),
            history=InMemoryHistory(),
            style=SHELL_STYLE,
        )
        self.write("Bracketeer shell. Type 'help' for commands.", "class:heading")

        while True:
            try:
                line = session.prompt(self.prompt_message)
            except KeyboardInterrupt:
                self.write("Use 'exit' or 'quit' to leave", "class:muted")
                continue
            except EOFError:
                break
            if not self.execute(line):
                break
        return 0
