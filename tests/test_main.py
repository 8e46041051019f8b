"""Tests for the top-level demo routine."""

import logging

import pytest

from warehouse import main as demo
from warehouse.core.exceptions import MigrationError, StoreConnectionError
from warehouse.db.session import create_engine, create_session_factory


class TestRunDemo:
    async def test_full_walkthrough(self, engine):
        product = await demo.run_demo(engine, create_session_factory(engine))

        assert product.name == "new name"
        assert product.brand == "new brand"
        assert product.timestamps.updated_at is None
        assert sorted(
            (variant.properties["color"], variant.properties["size"]) for variant in product.variants
        ) == [("green", "L"), ("green", "M"), ("red", "X")]

    async def test_stops_when_store_unreachable(self, tmp_path):
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'store.db'}")
        try:
            with pytest.raises(StoreConnectionError):
                await demo.run_demo(engine, create_session_factory(engine))
        finally:
            await engine.dispose()


class TestRun:
    def test_exits_nonzero_on_warehouse_error(self, monkeypatch):
        async def failing_main():
            raise MigrationError("ddl failed")

        monkeypatch.setattr(demo, "setup_logging", lambda **kwargs: None)
        monkeypatch.setattr(demo, "main", failing_main)

        with pytest.raises(SystemExit) as exc_info:
            demo.run()

        assert exc_info.value.code == 1

    def test_exits_nonzero_on_unexpected_error(self, monkeypatch, caplog):
        async def failing_main():
            raise RuntimeError("driver exploded")

        monkeypatch.setattr(demo, "setup_logging", lambda **kwargs: None)
        monkeypatch.setattr(demo, "main", failing_main)

        with caplog.at_level(logging.ERROR, logger="warehouse"):
            with pytest.raises(SystemExit) as exc_info:
                demo.run()

        assert exc_info.value.code == 1
        failed = [record for record in caplog.records if record.getMessage() == "DEMO_FAILED"]
        assert failed[0].error == "RuntimeError"
        assert failed[0].exc_info is not None
