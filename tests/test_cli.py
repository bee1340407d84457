"""Tests for the termline CLI argument handling."""

from __future__ import annotations

import pytest

from termline.cli import _build_parser


class TestParser:
    def test_defaults(self) -> None:
        args = _build_parser().parse_args([])
        assert args.prompt is None
        assert args.select is None
        assert args.log_level == "warning"

    def test_options(self) -> None:
        args = _build_parser().parse_args(
            ["--prompt", "$ ", "--select", "yes,no", "--log-level", "debug"]
        )
        assert args.prompt == "$ "
        assert args.select == "yes,no"
        assert args.log_level == "debug"

    def test_bad_log_level(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["--log-level", "chatty"])
