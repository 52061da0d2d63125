import pytest

from quizstore.core.errors import NotFound, Unauthorized, ValidationError
from quizstore.core.principal import Principal
from quizstore.services.progress import ProgressStore, compute_percentage


@pytest.fixture
def store(db):
    return ProgressStore(db)


def _play(store, principal, scores, section="S1"):
    rec = None
    for s in scores:
        rec = store.record_attempt(principal, section, s, 10, s * 10)
    return rec


def test_first_attempt_creates_record(store, principal):
    rec = store.record_attempt(principal, "S1", 4, 10, 40)
    assert rec.attempts == 1
    assert rec.best_score == 4
    assert (rec.score, rec.total_questions, rec.percentage) == (4, 10, 40)


@pytest.mark.parametrize("scores", [[5, 9, 3], [9, 3, 5], [3, 5, 9]])
def test_best_score_is_max_regardless_of_order(store, principal, scores):
    rec = _play(store, principal, scores)
    assert rec.best_score == 9
    assert rec.attempts == 3
    # score / percentage = dernière tentative
    assert rec.score == scores[-1]
    assert rec.percentage == scores[-1] * 10


def test_single_row_per_section(store, principal):
    _play(store, principal, [1, 2, 3], section="S1")
    _play(store, principal, [7], section="S2")

    items = store.list(principal)
    assert [p.section_id for p in items] == ["S1", "S2"]
    assert [p.attempts for p in items] == [3, 1]


def test_get_missing_section(store, principal):
    with pytest.raises(NotFound):
        store.get(principal, "S9")


@pytest.mark.parametrize(
    "score,total,pct",
    [(-1, 10, 0), (1, -1, 0), (11, 10, 100), (5, 10, 101), (5, 10, -1)],
)
def test_rejects_malformed_input(store, principal, score, total, pct):
    with pytest.raises(ValidationError):
        store.record_attempt(principal, "S1", score, total, pct)


def test_rejects_blank_section(store, principal):
    with pytest.raises(ValidationError):
        store.record_attempt(principal, " ", 1, 1, 100)


def test_unknown_license_is_unauthorized(store):
    with pytest.raises(Unauthorized):
        store.record_attempt(Principal("GHOST"), "S1", 1, 2, 50)


def test_compute_percentage():
    assert compute_percentage(1, 3) == 33
    assert compute_percentage(2, 3) == 67
    assert compute_percentage(0, 0) == 0
