"""Tests for gyst.logging_utils module."""

import logging

import pytest

from gyst.logging_utils import configure_logging


@pytest.mark.parametrize(
    "verbosity, level",
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_verbosity_levels(mocker, verbosity, level):
    basic_config = mocker.patch("gyst.logging_utils.logging.basicConfig")

    configure_logging(verbosity)

    assert basic_config.call_args.kwargs["level"] == level
