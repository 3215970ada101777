import pytest

from app.core import db as db_module


class _RecordingSession:
    def __init__(self):
        self.closed = False
        self.committed = False
        self.rolled_back = False

    def close(self):
        self.closed = True

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True


@pytest.fixture()
def recording_factory(monkeypatch):
    sessions: list[_RecordingSession] = []

    def _factory():
        session = _RecordingSession()
        sessions.append(session)
        return session

    monkeypatch.setattr(db_module, "_SessionLocal", _factory)
    return sessions


def test_request_session_closed_after_success(recording_factory):
    generator = db_module.get_db_session()
    session = next(generator)
    with pytest.raises(StopIteration):
        next(generator)
    assert session.closed


def test_request_session_closed_after_error(recording_factory):
    generator = db_module.get_db_session()
    session = next(generator)
    with pytest.raises(RuntimeError):
        generator.throw(RuntimeError("handler failed"))
    assert session.closed


def test_session_scope_commits_and_closes(recording_factory):
    with db_module.session_scope():
        pass
    session = recording_factory[0]
    assert session.committed and session.closed
    assert not session.rolled_back


def test_session_scope_rolls_back_on_error(recording_factory):
    with pytest.raises(ValueError):
        with db_module.session_scope():
            raise ValueError("boom")
    session = recording_factory[0]
    assert session.rolled_back and session.closed
    assert not session.committed


def test_sqlite_engine_uses_bounded_pool(tmp_path):
    engine = db_module.create_db_engine(
        "sqlite:///" + str(tmp_path / "pool.db"), pool_size=2, max_overflow=0, pool_timeout=1.5
    )
    try:
        assert engine.pool.size() == 2
        assert engine.pool.timeout() == 1.5
    finally:
        engine.dispose()
