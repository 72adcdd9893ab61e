import logging

from ochre.log_context import ContextFilter, get_context, log_context
from ochre.logging_config import LOG_FORMAT


def test_contexts_compose_and_unwind():
    with log_context(website="w1"):
        with log_context(page="about", website="w2"):
            assert get_context() == {"website": "w2", "page": "about"}
        assert get_context() == {"website": "w1"}
    assert get_context() == {}


def test_filter_injects_fields():
    record = logging.LogRecord("ochre", logging.INFO, __file__, 1, "msg", None, None)

    with log_context(element="Intro"):
        assert ContextFilter().filter(record)

    assert record.element == "Intro"


def test_formatted_records_render_context():
    formatter = logging.Formatter(LOG_FORMAT)
    inside = logging.LogRecord("ochre", logging.INFO, __file__, 1, "Building", None, None)
    outside = logging.LogRecord("ochre", logging.INFO, __file__, 1, "Done", None, None)

    with log_context(website="abc", page="about"):
        ContextFilter().filter(inside)
    ContextFilter().filter(outside)

    assert formatter.format(inside) == "INFO:ochre:Building [website=abc page=about]"
    assert formatter.format(outside) == "INFO:ochre:Done"
