import csv
import json
from collections import defaultdict
from typing import Dict, List

from .matching import STATUS_DUPLICATE, STATUS_MANUAL, STATUS_MATCHED, STATUS_UNMATCHED


class ReportBuilder:
    def __init__(self):
        self.entries = []
        self.file_issues = []

    def add_file_issue(self, issue: dict):
        self.file_issues.append(issue)

    def collect_match(self, result: dict) -> str:
        self.entries.append(result)
        return result["status"]

    def build(self) -> dict:
        stats = {
            "total": len(self.entries),
            STATUS_MATCHED: 0,
            STATUS_MANUAL: 0,
            STATUS_DUPLICATE: 0,
            STATUS_UNMATCHED: 0,
            "selected": 0,
            "by_band": defaultdict(int),
        }
        for e in self.entries:
            stats[e["status"]] += 1
            stats["by_band"][e["band"]] += 1
            if e["selected"]:
                stats["selected"] += 1
        return {
            "entries": self.entries,
            "file_issues": self.file_issues,
            "stats": stats,
        }


def write_json_report(report: dict, path: str):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, ensure_ascii=False, indent=2, default=_default_serializer)


def write_csv_report(report: dict, path: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["title", "release_year", "status", "confidence", "match_title", "match_year", "match_imdb_id"])
        for e in report["entries"]:
            match = e["match"] or {}
            writer.writerow(
                [
                    e["row"]["title"],
                    e["row"].get("release_year") or "",
                    e["status"],
                    e["confidence"],
                    match.get("title", ""),
                    match.get("year", ""),
                    match.get("imdb_id", ""),
                ]
            )


def print_summary(report: dict):
    stats = report["stats"]
    print("====== Import match summary ======")
    print(f"Rows: {stats['total']}")
    print(
        f"matched/manual/duplicate/unmatched: "
        f"{stats[STATUS_MATCHED]}/{stats[STATUS_MANUAL]}/{stats[STATUS_DUPLICATE]}/{stats[STATUS_UNMATCHED]}"
    )
    print(f"Selected for import: {stats['selected']}")
    if report["file_issues"]:
        print(f"File issues: {len(report['file_issues'])}")
        for iss in report["file_issues"]:
            print(f"  {iss['type']}: {iss['message']}")
    review = [e["row"]["title"] for e in report["entries"] if e["status"] == STATUS_MANUAL]
    if review:
        print("Needs manual review:")
        print(", ".join(review))


def print_quiz_summary(graded: Dict[str, object], near_miss: int = 80):
    print("====== Quiz results ======")
    print(f"Score: {graded['score']}/{graded['total']}")
    for rid, score in graded["round_scores"].items():
        print(f"  {rid}: {score}")
    misses: List[str] = []
    for round_result in graded["rounds"].values():
        for r in round_result["results"]:
            if not r["correct"] and r.get("similarity", 0) >= near_miss:
                misses.append(f"{r['question_id']} ({r['answer']!r} vs {r['expected']!r}, {r['similarity']}%)")
    if misses:
        print("Near misses worth a second look:")
        for m in misses:
            print(f"  {m}")


def _default_serializer(obj):
    if isinstance(obj, defaultdict):
        return dict(obj)
    raise TypeError(f"Type not serializable: {type(obj)}")
