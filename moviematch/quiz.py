from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .answers import answer_similarity, is_text_answer_correct
from .config import MatchConfig

Answer = object


@dataclass
class Question:
    id: str
    text: str = ""
    options: List[str] = field(default_factory=list)
    correct_answer: Optional[int] = None
    text_answer: Optional[str] = None
    alternative_answers: List[str] = field(default_factory=list)
    is_text_input: bool = False
    round_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Question":
        def pick(*keys, default=None):
            for k in keys:
                if data.get(k) is not None:
                    return data[k]
            return default

        correct = pick("correct_answer", "correctAnswer")
        return cls(
            id=str(data["id"]),
            text=str(pick("text", default="")),
            options=[str(o) for o in pick("options", default=[])],
            correct_answer=int(correct) if correct is not None else None,
            text_answer=_optional_str(pick("text_answer", "textAnswer")),
            alternative_answers=[str(a) for a in pick("alternative_answers", "alternativeAnswers", default=[])],
            is_text_input=bool(pick("is_text_input", "isTextInput", default=False)),
            round_id=_optional_str(pick("round_id", "roundId")),
        )


def grade_question(question: Question, answer: Answer, config: Optional[MatchConfig] = None) -> Dict[str, object]:
    config = config or MatchConfig()
    result = {
        "question_id": question.id,
        "answer": answer,
        "correct": False,
        "exact": False,
    }
    if question.is_text_input:
        # YAML reads an answer like 1941 as an int
        text = "" if answer is None else str(answer)
        expected = question.text_answer or ""
        result["expected"] = expected
        result["exact"] = bool(text) and text.lower().strip() == expected.lower().strip()
        result["correct"] = result["exact"] or is_text_answer_correct(
            text, question.text_answer, config.answer_options(question.alternative_answers)
        )
        result["similarity"] = answer_similarity(text, expected)
    else:
        result["expected"] = question.correct_answer
        chosen = _chosen_index(answer)
        result["exact"] = chosen is not None and chosen == question.correct_answer
        result["correct"] = result["exact"]
    return result


def score_round(
    questions: List[Question],
    answers: Mapping[str, Answer],
    config: Optional[MatchConfig] = None,
) -> Dict[str, object]:
    """Grade every question of a round; one point per correct answer."""
    results = [grade_question(q, answers.get(q.id), config) for q in questions]
    return {
        "score": sum(1 for r in results if r["correct"]),
        "total": len(questions),
        "results": results,
    }


def score_quiz(
    questions: List[Question],
    answers: Mapping[str, Answer],
    config: Optional[MatchConfig] = None,
) -> Dict[str, object]:
    rounds: Dict[str, List[Question]] = {}
    for q in questions:
        rounds.setdefault(q.round_id or "default", []).append(q)

    round_results = {rid: score_round(qs, answers, config) for rid, qs in rounds.items()}
    return {
        "score": sum(r["score"] for r in round_results.values()),
        "total": len(questions),
        "round_scores": {rid: r["score"] for rid, r in round_results.items()},
        "rounds": round_results,
    }


def _optional_str(value) -> Optional[str]:
    return None if value is None else str(value)


def _chosen_index(answer: Answer) -> Optional[int]:
    # bool is an int subclass; True must not count as option 1
    if isinstance(answer, bool):
        return None
    if isinstance(answer, int):
        return answer
    if isinstance(answer, str) and answer.strip().isdigit():
        return int(answer.strip())
    return None
