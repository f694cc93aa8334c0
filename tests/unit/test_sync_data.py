"""Tests for the cache warming CLI."""

import pytest

import sync_data
from app.container import build_container


@pytest.fixture
def cache_file(tmp_path):
    return str(tmp_path / "cache.db")


@pytest.fixture(autouse=True)
def session(monkeypatch, cache_file, fetchers, clock):
    monkeypatch.setattr(
        sync_data, "build_container", lambda **kw: build_container(cache_file, fetchers=fetchers, clock=clock)
    )
    monkeypatch.setattr(sync_data, "setup_logging", lambda **kw: None)


class TestLoad:
    @pytest.mark.asyncio
    async def test_cache_first_fetches_each_domain_once(self, fetchers):
        assert await sync_data.load("token", force=False) is True
        assert all(f.calls == 1 for f in fetchers.values())

    @pytest.mark.asyncio
    async def test_force_fetches_each_domain_once(self, fetchers):
        assert await sync_data.load("token", force=False) is True
        assert await sync_data.load("token", force=True) is True
        assert all(f.calls == 2 for f in fetchers.values())

    @pytest.mark.asyncio
    async def test_failed_domain_reported(self, fetchers):
        fetchers[sync_data.DomainKey.PROFILE].error = RuntimeError("down")
        assert await sync_data.load("token", force=True) is False


class TestMain:
    def test_status_exits_nonzero_on_empty_cache(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["sync_data.py", "--status"])
        with pytest.raises(SystemExit) as exc:
            sync_data.main()
        assert exc.value.code == 1

    def test_status_succeeds_once_warmed(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["sync_data.py", "token"])
        sync_data.main()
        monkeypatch.setattr("sys.argv", ["sync_data.py", "--status"])
        sync_data.main()

    def test_missing_token_prints_usage(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["sync_data.py"])
        with pytest.raises(SystemExit) as exc:
            sync_data.main()
        assert exc.value.code == 1
        assert "Usage" in capsys.readouterr().out
