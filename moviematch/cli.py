import argparse
import json
import os
import sys
from typing import List, Optional

from .config import load_config
from .importer import match_rows
from .keywords import format_catalogue_record
from .parser import load_answers, load_catalogue, load_import_rows, load_owned_ids, load_quiz
from .quiz import score_quiz
from .report import ReportBuilder, print_quiz_summary, print_summary, write_csv_report, write_json_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Match spreadsheet imports against a movie catalogue and grade quiz answers"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Score spreadsheet rows against catalogue records")
    imp.add_argument("rows", help="CSV export of the spreadsheet to import")
    imp.add_argument("--catalogue", required=True, help="JSON file with candidate catalogue records")
    imp.add_argument("--owned", default=None, help="Text file of IMDb ids already in the user's list")
    imp.add_argument("--config", default=None, help="YAML file with matching thresholds")
    imp.add_argument("--outdir", default="out", help="Report output directory, default out")
    imp.add_argument("--max-rows", type=int, default=None, help="Only score the first N rows")
    imp.add_argument("--verbose", action="store_true", help="Print one line per row")

    cat = sub.add_parser("catalogue", help="Format catalogue records with sort titles and search keywords")
    cat.add_argument("catalogue", help="JSON file with catalogue records")
    cat.add_argument("--out", default=None, help="Output JSON path, default stdout")

    quiz = sub.add_parser("quiz", help="Grade submitted quiz answers")
    quiz.add_argument("quiz", help="YAML file with the quiz questions")
    quiz.add_argument("answers", help="JSON/YAML mapping of question id to answer")
    quiz.add_argument("--config", default=None, help="YAML file with matching thresholds")
    quiz.add_argument("--out", default=None, help="Output JSON path for the graded quiz")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    for path in _input_paths(args):
        if not os.path.isfile(path):
            print(f"File not found: {path}", file=sys.stderr)
            sys.exit(1)

    try:
        if args.command == "import":
            exit_code = run_import(args)
        elif args.command == "catalogue":
            exit_code = run_catalogue(args)
        else:
            exit_code = run_quiz(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1
    sys.exit(exit_code)


def run_import(args) -> int:
    config = load_config(args.config)
    rows, row_issues = load_import_rows(args.rows, args.max_rows)
    catalogue, catalogue_issues = load_catalogue(args.catalogue)
    owned = load_owned_ids(args.owned)

    report_builder = ReportBuilder()
    for issue in row_issues + catalogue_issues:
        report_builder.add_file_issue(issue)

    for result in match_rows(rows, catalogue, owned, config):
        status = report_builder.collect_match(result)
        if args.verbose:
            print(f"[{result['row']['title']}] status={status} confidence={result['confidence']}")

    report_data = report_builder.build()

    os.makedirs(args.outdir, exist_ok=True)
    write_json_report(report_data, os.path.join(args.outdir, "report.json"))
    write_csv_report(report_data, os.path.join(args.outdir, "report.csv"))
    print_summary(report_data)

    return 1 if _has_error(report_data["file_issues"]) else 0


def run_catalogue(args) -> int:
    catalogue, issues = load_catalogue(args.catalogue)
    for issue in issues:
        print(f"{issue['severity']} {issue['type']}: {issue['message']}", file=sys.stderr)
    formatted = [format_catalogue_record(r) for r in catalogue]
    _write_json(formatted, args.out)
    return 1 if _has_error(issues) else 0


def run_quiz(args) -> int:
    config = load_config(args.config)
    questions, quiz_issues = load_quiz(args.quiz)
    answers, answer_issues = load_answers(args.answers)
    issues = quiz_issues + answer_issues
    for issue in issues:
        print(f"{issue['severity']} {issue['type']}: {issue['message']}", file=sys.stderr)
    if _has_error(issues):
        return 1

    graded = score_quiz(questions, answers, config)
    if args.out:
        _write_json(graded, args.out)
    print_quiz_summary(graded)
    return 0


def _input_paths(args) -> List[str]:
    if args.command == "import":
        paths = [args.rows, args.catalogue]
        if args.owned:
            paths.append(args.owned)
        return paths
    if args.command == "catalogue":
        return [args.catalogue]
    return [args.quiz, args.answers]


def _has_error(issues: List[dict]) -> bool:
    return any(i["severity"] == "ERROR" for i in issues)


def _write_json(data, path: Optional[str]):
    if not path:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
        return
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
