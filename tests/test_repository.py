from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import inspect

from esms.modules._infra import repository


def test_concurrent_first_use_creates_tables_once(data_dir):
    barrier = threading.Barrier(8)

    def first_use():
        barrier.wait()
        return repository.get_engine()

    with ThreadPoolExecutor(max_workers=8) as pool:
        engines = list(pool.map(lambda _: first_use(), range(8)))

    assert len({id(engine) for engine in engines}) == 1
    assert "audit_logs" in inspect(engines[0]).get_table_names()
    assert (data_dir / "esms.db").exists()


def test_reset_engines_rereads_the_database_url(data_dir, monkeypatch, tmp_path_factory):
    first = repository.get_engine()
    other = tmp_path_factory.mktemp("other")
    monkeypatch.setenv("ESMS_DATA_DIR", str(other))
    repository.reset_engines()
    second = repository.get_engine()
    assert second is not first
    assert (other / "esms.db").exists()
