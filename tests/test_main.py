import pytest

pytest.importorskip("PySide6.QtWidgets")

import main


def test_parse_args_defaults():
    args, qt_args = main.parse_args([])
    assert args.size == 3
    assert args.log_level == "WARNING"
    assert qt_args == []


def test_parse_args_passes_qt_options_through():
    args, qt_args = main.parse_args(["--size", "5", "-platform", "offscreen"])
    assert args.size == 5
    assert qt_args == ["-platform", "offscreen"]


def test_parse_args_rejects_unknown_level():
    with pytest.raises(SystemExit):
        main.parse_args(["--log-level", "LOUD"])
