from moviematch.config import MatchConfig
from moviematch.importer import best_candidate, match_row, match_rows
from moviematch.models import CanonicalRecord, ImportRow

CATALOGUE = [
    CanonicalRecord(title="Elf", year="2003", imdb_id="tt0319343"),
    CanonicalRecord(title="The Polar Express", year="2004", imdb_id="tt0338348"),
    CanonicalRecord(title="Home Alone", year="1990", imdb_id="tt0099785"),
]


def test_best_candidate_picks_highest_score():
    record, score = best_candidate(ImportRow(title="Home Alone", release_year="1991"), CATALOGUE)
    assert record.imdb_id == "tt0099785"
    assert score == 80


def test_best_candidate_empty_catalogue():
    assert best_candidate(ImportRow(title="Elf"), []) == (None, 0)


def test_match_rows_statuses():
    rows = [
        ImportRow(title="Elf", release_year="2003"),
        ImportRow(title="Polar Express", release_year="2004"),
        ImportRow(title="Home Alone"),
        ImportRow(title="A Christmas Story"),
    ]
    results = match_rows(rows, CATALOGUE)
    assert [r["status"] for r in results] == ["matched", "matched", "manual", "unmatched"]
    assert [r["confidence"] for r in results] == [100, 80, 60, 0]
    assert results[1]["match"]["title"] == "The Polar Express"
    assert results[3]["match"] is None
    assert [r["selected"] for r in results] == [True, True, True, False]


def test_owned_movies_are_duplicates():
    result = match_row(ImportRow(title="Elf", release_year="2003"), CATALOGUE, owned_ids=["TT0319343"])
    assert result["status"] == "duplicate"
    assert not result["selected"]


def test_imdb_id_pins_the_record():
    result = match_row(ImportRow(title="Kevin movie", imdb_id="tt0099785"), CATALOGUE)
    assert result["match"]["title"] == "Home Alone"
    assert result["status"] == "manual"


def test_unknown_imdb_id_falls_back_to_scoring():
    result = match_row(ImportRow(title="Elf", release_year="2003", imdb_id="tt9999999"), CATALOGUE)
    assert result["match"]["imdb_id"] == "tt0319343"
    assert result["status"] == "matched"


def test_config_thresholds_apply():
    result = match_row(ImportRow(title="Home Alone"), CATALOGUE, config=MatchConfig(auto_match_threshold=60))
    assert result["status"] == "matched"


def test_weak_candidate_is_dropped_with_zero_confidence():
    row = ImportRow(title="Alone at Home")
    result = match_row(row, CATALOGUE)
    assert result["status"] == "unmatched"
    assert result["match"] is None
    assert result["confidence"] == 0
    assert result["band"] == "low"
    assert not result["selected"]

    lenient = match_row(row, CATALOGUE, config=MatchConfig(review_threshold=20))
    assert lenient["status"] == "manual"
    assert lenient["match"]["title"] == "Home Alone"
    assert lenient["confidence"] == 27
