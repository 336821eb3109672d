from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from wealthmanager.app import create_app
from wealthmanager.models.db import Database
from wealthmanager.seed.service import SeedService


@pytest.fixture
def test_ctx(tmp_path) -> Generator[dict, None, None]:
    db_file = tmp_path / "test.db"
    database = Database(f"sqlite:///{db_file}")
    app = create_app(database=database, seed_sample_data=False)

    with TestClient(app) as client:
        yield {
            "app": app,
            "client": client,
            "database": database,
        }

    database.close()


@pytest.fixture
def seeded_ctx(test_ctx) -> dict:
    db = test_ctx["database"].session()
    try:
        SeedService(db=db).import_sample_data()
    finally:
        db.close()
    return test_ctx
