from procurement.core.config import Settings


def test_database_url_from_postgres_conn(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("POSTGRES_CONN", "postgresql://u:p@db/tender")

    s = Settings(_env_file=None)

    assert s.database_url == "postgresql://u:p@db/tender"


def test_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    s = Settings(_env_file=None)

    assert s.api_prefix == "/api"
    assert s.http_timeout == 4.0
    assert s.request_id_header == "X-Request-Id"
