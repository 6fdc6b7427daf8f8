import argparse
import json
import logging

import pytest

from bracketeer.models import EliminationRule, PairingDiscipline, ScoringMode
from bracketeer.testing import __main__ as cli
from bracketeer.testing.__main__ import (
    build_generate_config,
    create_main_parser,
    parse_size_range,
    run_generate_command,
    run_standard_mode,
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    package_logger = logging.getLogger("bracketeer")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


def test_parse_size_range():
    assert parse_size_range("24") == [24]
    assert parse_size_range(" 16-64 ") == [16, 64]


@pytest.mark.parametrize("value", ["64-16", "abc", "1", "4-8-16", "99999"])
def test_parse_size_range_rejects(value):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_size_range(value)


def test_generate_arguments_build_config():
    args = create_main_parser().parse_args(
        [
            "generate",
            "--participants",
            "12",
            "--elimination",
            "double",
            "--discipline",
            "danish",
            "--scoring",
            "placement_group",
            "--playoff-cut",
            "4",
            "--seed",
            "9",
        ]
    )

    config = build_generate_config(args)

    assert args.func is run_generate_command
    assert config.num_participants == 12
    assert config.num_rounds is None
    assert config.elimination_rule is EliminationRule.DOUBLE
    assert config.pairing_discipline is PairingDiscipline.DANISH
    assert config.scoring_mode is ScoringMode.PLACEMENT_GROUP
    assert config.playoff_cut == 4
    assert config.seed == 9


def test_generate_writes_json(tmp_path, capsys):
    output = tmp_path / "competition.json"

    code = run_standard_mode(
        ["generate", "--participants", "8", "--seed", "2", "--output", str(output)]
    )

    assert code == 0
    assert len(json.loads(output.read_text(encoding="utf-8"))["participants"]) == 8
    out = capsys.readouterr().out
    assert "Generated" in out
    assert "Opp Match Win %" in out


def test_generate_reports_invalid_cut(capsys):
    code = run_standard_mode(
        ["generate", "--participants", "8", "--playoff-cut", "6", "--seed", "2"]
    )

    assert code == 1
    assert "power of two" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [[], ["shell"]])
def test_shell_is_the_default_command(monkeypatch, argv):
    opened = []
    monkeypatch.setattr(cli, "run_shell_command", lambda args: opened.append(args) or 0)

    assert run_standard_mode(argv) == 0
    assert len(opened) == 1
