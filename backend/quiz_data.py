"""Sikhi knowledge quiz questions and scoring."""

from typing import Dict, List

QUIZ_QUESTIONS: List[Dict] = [
    {
        "id": "1",
        "question": "Who was the first Guru of Sikhism?",
        "options": ["Guru Nanak Dev Ji", "Guru Angad Dev Ji", "Guru Amar Das Ji", "Guru Ram Das Ji"],
        "correct_answer": "Guru Nanak Dev Ji",
    },
    {
        "id": "2",
        "question": "What is the name of the Sikh holy scripture?",
        "options": ["Guru Granth Sahib", "Dasam Granth", "Adi Granth", "Sarbloh Granth"],
        "correct_answer": "Guru Granth Sahib",
    },
    {
        "id": "3",
        "question": "How many Gurus are there in Sikhism?",
        "options": ["5", "10", "11", "12"],
        "correct_answer": "10",
    },
    {
        "id": "4",
        "question": "What is the name of the Sikh place of worship?",
        "options": ["Mandir", "Gurdwara", "Masjid", "Temple"],
        "correct_answer": "Gurdwara",
    },
    {
        "id": "5",
        "question": "What does 'Waheguru' mean?",
        "options": ["Great Teacher", "Wonderful Lord", "Divine Light", "Eternal Truth"],
        "correct_answer": "Wonderful Lord",
    },
]


def public_questions() -> List[Dict]:
    return [{k: q[k] for k in ("id", "question", "options")} for q in QUIZ_QUESTIONS]


def score_answers(answers: Dict[str, str]) -> tuple[int, list[dict]]:
    review = []
    score = 0
    for q in QUIZ_QUESTIONS:
        given = answers.get(q["id"])
        ok = given == q["correct_answer"]
        if ok:
            score += 1
        review.append(
            {
                "id": q["id"],
                "question": q["question"],
                "your_answer": given,
                "correct_answer": q["correct_answer"],
                "is_correct": ok,
            }
        )
    return score, review


def result_message(score: int, total: int) -> str:
    if total and score == total:
        return "Perfect score! Amazing knowledge of Sikh teachings!"
    if score >= total / 2:
        return "Good job! You have a solid understanding of Sikh teachings."
    return "Keep learning! Every step on the spiritual path is valuable."
