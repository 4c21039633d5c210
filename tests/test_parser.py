import json

from moviematch.parser import load_answers, load_catalogue, load_import_rows, load_owned_ids, load_quiz


def test_load_import_rows_with_header_aliases(tmp_path):
    path = tmp_path / "movies.csv"
    path.write_text(
        "Title,Year,Watched,Rating,Notes\n"
        "Elf,2003,yes,8,Classic\n"
        ",1990,no,,\n"
        "Home Alone,,,,\n",
        encoding="utf-8",
    )
    rows, issues = load_import_rows(str(path))
    assert [r.title for r in rows] == ["Elf", "Home Alone"]
    assert rows[0].release_year == "2003"
    assert rows[0].watched is True
    assert rows[0].rating == 8.0
    assert rows[0].review == "Classic"
    assert rows[1].release_year is None
    assert rows[1].rating is None
    assert [i["type"] for i in issues] == ["MISSING_TITLE"]
    assert issues[0]["severity"] == "WARNING"


def test_load_import_rows_name_and_imdb_columns(tmp_path):
    path = tmp_path / "movies.csv"
    path.write_text("name,release_date,imdbID\nThe Polar Express,2004-11-10,tt0338348\n", encoding="utf-8")
    rows, issues = load_import_rows(str(path))
    assert not issues
    assert rows[0].title == "The Polar Express"
    assert rows[0].release_year == "2004-11-10"
    assert rows[0].imdb_id == "tt0338348"


def test_load_import_rows_max_rows(tmp_path):
    path = tmp_path / "movies.csv"
    path.write_text("title\nA\nB\nC\n", encoding="utf-8")
    rows, _ = load_import_rows(str(path), max_rows=2)
    assert [r.title for r in rows] == ["A", "B"]


def test_load_import_rows_max_rows_stops_before_later_rows(tmp_path):
    path = tmp_path / "movies.csv"
    path.write_text("title,year\nA,2000\nB,2001\n,2002\nC,2003\n", encoding="utf-8")
    rows, issues = load_import_rows(str(path), max_rows=2)
    assert [r.title for r in rows] == ["A", "B"]
    assert issues == []


def test_load_import_rows_missing_file(tmp_path):
    rows, issues = load_import_rows(str(tmp_path / "missing.csv"))
    assert rows == []
    assert issues[0]["type"] == "PARSE_ERROR"
    assert issues[0]["severity"] == "ERROR"


def test_load_catalogue_search_payload(tmp_path):
    path = tmp_path / "catalogue.json"
    path.write_text(
        json.dumps({"Search": [{"Title": "Elf", "Year": "2003", "imdbID": "tt0319343"}, "junk", {"Year": "1990"}]}),
        encoding="utf-8",
    )
    records, issues = load_catalogue(str(path))
    assert [r.title for r in records] == ["Elf", ""]
    assert records[0].imdb_id == "tt0319343"
    assert [i["type"] for i in issues] == ["BAD_RECORD", "MISSING_TITLE"]


def test_load_catalogue_invalid_json(tmp_path):
    path = tmp_path / "catalogue.json"
    path.write_text("{not json", encoding="utf-8")
    records, issues = load_catalogue(str(path))
    assert records == []
    assert issues[0]["type"] == "PARSE_ERROR"


def test_load_catalogue_single_detail_response(tmp_path):
    path = tmp_path / "detail.json"
    path.write_text(json.dumps({"Title": "Elf", "Year": "2003", "imdbID": "tt0319343", "Response": "True"}), encoding="utf-8")
    records, issues = load_catalogue(str(path))
    assert [r.title for r in records] == ["Elf"]
    assert records[0].year == "2003"
    assert issues == []


def test_load_catalogue_object_without_records(tmp_path):
    path = tmp_path / "error.json"
    path.write_text(json.dumps({"Response": "False", "Error": "Movie not found!"}), encoding="utf-8")
    records, issues = load_catalogue(str(path))
    assert records == []
    assert [i["type"] for i in issues] == ["PARSE_ERROR"]
    assert issues[0]["severity"] == "ERROR"


def test_load_owned_ids(tmp_path):
    path = tmp_path / "owned.txt"
    path.write_text("tt0319343\n\n# comment\n tt0099785 \n", encoding="utf-8")
    assert load_owned_ids(str(path)) == ["tt0319343", "tt0099785"]
    assert load_owned_ids(None) == []


def test_load_quiz_and_answers(tmp_path):
    quiz = tmp_path / "quiz.yaml"
    quiz.write_text(
        "questions:\n"
        "  - id: q1\n"
        "    text: Name the film\n"
        "    textAnswer: Elf\n"
        "    isTextInput: true\n"
        "  - text: no id here\n",
        encoding="utf-8",
    )
    questions, issues = load_quiz(str(quiz))
    assert [q.id for q in questions] == ["q1"]
    assert questions[0].text_answer == "Elf"
    assert [i["type"] for i in issues] == ["BAD_QUESTION"]

    answers = tmp_path / "answers.json"
    answers.write_text(json.dumps({"q1": "elf", "q2": 1}), encoding="utf-8")
    loaded, issues = load_answers(str(answers))
    assert loaded == {"q1": "elf", "q2": 1}
    assert issues == []
