from __future__ import annotations

import pytest

from esms.modules._infra.repository import reset_engines


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Point the application at an empty data directory."""
    monkeypatch.setenv("ESMS_DATA_DIR", str(tmp_path))
    for name in ("ESMS_DATABASE_URL", "ESMS_UPLOAD_DIR", "ESMS_PUBLIC_URL"):
        monkeypatch.delenv(name, raising=False)
    reset_engines()
    yield tmp_path
    reset_engines()
