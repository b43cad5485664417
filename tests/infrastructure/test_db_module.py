"""Tests for the infrastructure.db module."""

from sqlalchemy import text

from src.infrastructure import db as db_module


def test_create_engine_passes_pool_configuration(monkeypatch):
    """_create_engine should configure QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://expenses")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://expenses"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["max_overflow"] == 5
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_create_engine_creates_sqlite_parent_directory(tmp_path):
    """File-based SQLite URLs get their directory created."""
    db_path = tmp_path / "nested" / "data" / "expenses.db"

    engine = db_module._create_engine(f"sqlite:///{db_path}")
    with engine.connect() as conn:
        assert conn.execute(text("SELECT 1")).scalar() == 1
    engine.dispose()

    assert db_path.parent.is_dir()


def test_get_expenses_engine_caches_per_url(monkeypatch):
    """The engine is memoized until a different URL is requested."""
    monkeypatch.setattr(db_module, "_expenses_engine", None)
    monkeypatch.setattr(db_module, "_expenses_engine_url", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)

    first = db_module.get_expenses_engine("sqlite:///a.db")
    second = db_module.get_expenses_engine("sqlite:///a.db")
    other = db_module.get_expenses_engine("sqlite:///b.db")

    assert first is second
    assert other == "engine:sqlite:///b.db"
    assert created == ["sqlite:///a.db", "sqlite:///b.db"]


def test_adapter_returns_engine_for_its_url(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the module helper."""
    monkeypatch.setattr(
        db_module,
        "get_expenses_engine",
        lambda url: f"engine:{url}",
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter("sqlite:///x.db")

    assert adapter.get_expenses_engine() == "engine:sqlite:///x.db"
