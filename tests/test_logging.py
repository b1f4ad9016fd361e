import logging

from core.logging import get_logger, parse_filter


def test_parse_filter_default():
    assert parse_filter("comphub=debug") == (None, {"comphub": logging.DEBUG})


def test_parse_filter_root_and_targets():
    root, targets = parse_filter("info, comphub=debug ,uvicorn.access=warning")

    assert root == logging.INFO
    assert targets == {"comphub": logging.DEBUG, "uvicorn.access": logging.WARNING}


def test_parse_filter_skips_garbage():
    assert parse_filter("comphub=loud,,") == (None, {})


def test_loggers_live_under_service_namespace():
    assert get_logger("sandbox.runner").name == "comphub.sandbox.runner"
