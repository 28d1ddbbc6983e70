import pytest

from grandline.cli import build_parser, main


def test_serve_defaults():
    args = build_parser().parse_args(["serve"])
    assert args.host == "127.0.0.1"
    assert args.port == 8000
    assert args.reload is False


def test_reset_refuses_without_confirmation(capsys):
    assert main(["reset"]) == 1
    assert "--yes" in capsys.readouterr().err


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["sail"])
