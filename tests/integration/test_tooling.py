"""Tests for the logging helpers, schema utilities and command line entry points."""

import pytest
import structlog
from catalogue.utils.db import drop_db, setup_db
from catalogue.utils.logging import add_context, clear_context, get_log_level


class TestLogLevel:
    @pytest.mark.parametrize(
        "env, expected",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("unknown", "INFO")],
    )
    def test_level_per_environment(self, monkeypatch, env, expected):
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENVIRONMENT", env)
        assert get_log_level() == expected

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestLogContext:
    def test_context_is_bound_and_cleared(self):
        add_context(customer_id="cust-001")
        assert structlog.contextvars.get_contextvars()["customer_id"] == "cust-001"

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestSchemaUtilities:
    def test_memory_providers_need_no_schema(self, catalogue_domain, ordering_bed):
        from ordering.domain import ordering

        assert setup_db(catalogue_domain) == 0
        assert drop_db(catalogue_domain) == 0
        assert setup_db(ordering) == 0


class TestManageCommand:
    def test_setup_all_domains(self, monkeypatch):
        import manage

        calls = []
        monkeypatch.setattr(manage, "setup_databases", lambda domains=None: calls.append(("setup", domains)))

        manage.main(["setup-db"])

        assert calls == [("setup", None)]

    def test_drop_one_domain(self, monkeypatch):
        import manage

        calls = []
        monkeypatch.setattr(manage, "drop_databases", lambda domains=None: calls.append(("drop", domains)))

        manage.main(["drop-db", "--domain", "ordering"])

        assert calls == [("drop", ["ordering"])]

    def test_unknown_domain(self):
        import manage

        with pytest.raises(SystemExit):
            manage.main(["setup-db", "--domain", "inventory"])


class TestServerCommand:
    def test_runs_every_domain_by_default(self, monkeypatch):
        import server

        started = []

        async def _run(domain_names):
            started.extend(domain_names)

        monkeypatch.setattr(server, "run", _run)

        server.main([])

        assert started == ["catalogue", "ordering"]

    def test_single_domain(self, monkeypatch):
        import server

        started = []

        async def _run(domain_names):
            started.extend(domain_names)

        monkeypatch.setattr(server, "run", _run)

        server.main(["--domain", "ordering"])

        assert started == ["ordering"]

    def test_unknown_domain_name(self):
        import server

        with pytest.raises(ValueError):
            server._get_domain("inventory")
