from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import config

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture(autouse=True)
def memory_backend(monkeypatch) -> None:
    monkeypatch.setattr(config, "STORE_BACKEND", "memory")


def _open_session() -> AppTest:
    app = AppTest.from_file(APP_PATH, default_timeout=30)
    app.run()
    assert not app.exception
    return app


def _banner_text(app: AppTest) -> str:
    return "\n".join(m.value for m in app.markdown)


def test_each_session_gets_its_own_idea_map() -> None:
    first = _open_session()
    second = _open_session()

    assert first.session_state["idea_map"] is not second.session_state["idea_map"]


def test_idea_map_survives_reruns_of_one_session() -> None:
    app = _open_session()
    idea_map = app.session_state["idea_map"]

    app.run()
    assert app.session_state["idea_map"] is idea_map


def test_store_error_stays_in_the_session_that_hit_it() -> None:
    first = _open_session()
    second = _open_session()

    first.session_state["idea_map"].last_error = "Could not save idea: disk full"
    first.run()
    second.run()

    assert "disk full" in _banner_text(first)
    assert "disk full" not in _banner_text(second)
    assert second.session_state["idea_map"].last_error is None
