# tests/core/test_conversion_context.py
"""
Testes do ConversionContext: identidade, eventos estruturados e warnings.
"""

import logging
import re

from meshery_helm.core.context import ConversionContext, new_build_id
from meshery_helm.core.logging import LOGGER_NAME, configure_logging


def test_build_ids_are_unique_hex_tokens():
    ids = {new_build_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(re.fullmatch(r"[0-9a-f]{32}", i) for i in ids)


def test_each_context_gets_its_own_build_id():
    assert ConversionContext().build_id != ConversionContext().build_id


def test_log_appends_structured_event():
    ctx = ConversionContext(build_id="b-1")

    ctx.log(step_id="render", level="info", message="manifest generated", bytes=12)

    (event,) = ctx.events
    assert event["build_id"] == "b-1"
    assert event["step_id"] == "render"
    assert event["level"] == "info"
    assert event["message"] == "manifest generated"
    assert event["bytes"] == 12
    assert "timestamp" in event


def test_log_is_mirrored_to_stdlib_logging(caplog):
    ctx = ConversionContext(logger_name="meshery_helm.test")

    with caplog.at_level(logging.INFO, logger="meshery_helm.test"):
        ctx.log(step_id="archive", level="info", message="Packaged chart size: 10 bytes")

    assert "[archive] Packaged chart size: 10 bytes" in caplog.text


def test_warnings_are_grouped_by_step_and_logged():
    ctx = ConversionContext()

    ctx.add_warning(step_id="workspace", message="cleanup failed", path="/tmp/x")
    ctx.add_warning(step_id="workspace", message="cleanup failed again")

    assert ctx.warnings == {"workspace": ["cleanup failed", "cleanup failed again"]}
    assert [e["level"] for e in ctx.events_for("workspace")] == ["warning", "warning"]


def test_contexts_do_not_share_state():
    a = ConversionContext()
    b = ConversionContext()
    a.log(step_id="x", level="info", message="only in a")
    assert b.events == []


def test_configure_logging_is_idempotent():
    logger = configure_logging("DEBUG")
    configure_logging(logging.INFO)

    ours = [h for h in logger.handlers if getattr(h, "_meshery_helm", False)]
    assert logger.name == LOGGER_NAME
    assert len(ours) == 1
    assert logger.level == logging.INFO

    for h in ours:
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
