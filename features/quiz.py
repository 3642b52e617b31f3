from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from app_utils.metrics import percent

TIP_FALLBACK = "No specific tip available for this answer."


@dataclass(frozen=True)
class Option:
    label: str
    value: int  # 1 = best / lowest impact


@dataclass(frozen=True)
class Question:
    category: str
    question: str
    options: Tuple[Option, ...]
    tips: Dict[int, str] = field(default_factory=dict)

    @property
    def best(self) -> int:
        return min(o.value for o in self.options)

    @property
    def worst(self) -> int:
        return max(o.value for o in self.options)


@dataclass(frozen=True)
class QuizScore:
    total: int
    maximum: int
    percent: int


def _q(category, question, options, tips):
    return Question(
        category=category,
        question=question,
        options=tuple(Option(label, value) for label, value in options),
        tips=dict(tips),
    )


QUESTIONS = (
    _q("Waste Management", "How do you handle waste at home?", [
        ("Recycle and compost", 1),
        ("Recycle but don’t compost", 2),
        ("Don’t separate waste", 3),
        ("Throw everything away", 4),
    ], {
        1: "Excellent! Separating waste and composting reduces landfill and provides organic fertilizer.",
        2: "Good job recycling, but adding composting would further reduce waste.",
        3: "Not separating waste leads to inefficient recycling. Consider sorting your trash.",
        4: "Throwing everything away significantly increases landfill and environmental harm.",
    }),
    _q("Transportation", "How do you travel daily?", [
        ("Use public transport, bike, or walk", 1),
        ("Carpool or drive a hybrid/electric vehicle", 2),
        ("Mostly drive my own car", 3),
        ("Drive frequently for short trips", 4),
    ], {
        1: "Excellent choice for reducing emissions and congestion.",
        2: "Good, carpooling or using efficient vehicles minimizes your impact.",
        3: "Driving alone increases emissions. Look for alternatives when possible.",
        4: "Frequent short trips add up; try to combine errands or use public transit.",
    }),
    _q("Food Purchasing", "How do you buy groceries?", [
        ("Buy local and use reusable bags", 1),
        ("Buy some local produce and use some plastic bags", 2),
        ("Buy packaged foods and use disposable bags", 3),
        ("Buy pre-packaged foods and always use plastic bags", 4),
    ], {
        1: "Great! Supporting local markets and reusables minimizes packaging waste.",
        2: "Better than fully packaged, but try to use fewer plastic bags.",
        3: "Packaged foods increase waste; consider fresh, local options.",
        4: "High packaging waste. Opt for local produce and reusable options whenever possible.",
    }),
    _q("Household Products", "What kind of cleaning products do you use?", [
        ("Use eco-friendly, non-toxic cleaners", 1),
        ("Use some eco-friendly, but also regular cleaners", 2),
        ("Mostly use regular cleaning products", 3),
        ("Use harsh chemical cleaners often", 4),
    ], {
        1: "Excellent! Eco-friendly cleaners are safer for both the environment and your health.",
        2: "A mix is okay, but switching entirely to eco-friendly products is best.",
        3: "Using mostly regular products increases chemical waste. Consider greener alternatives.",
        4: "Harsh chemicals can be very damaging. Look for non-toxic, sustainable cleaning options.",
    }),
    _q("Food Waste", "How do you manage food waste?", [
        ("Compost food scraps and minimize waste", 1),
        ("Throw away food scraps, but try not to waste much", 2),
        ("Waste a lot of food", 3),
        ("Don’t think about food waste", 4),
    ], {
        1: "Excellent! Composting not only reduces waste but also creates nutrient-rich soil.",
        2: "Some effort is made, but planning meals better could reduce waste even more.",
        3: "High food waste can be reduced by planning and proper storage.",
        4: "Ignoring food waste contributes to environmental harm. Consider mindful consumption.",
    }),
    _q("Electronics Disposal", "How do you dispose of old electronics?", [
        ("Recycle them properly", 1),
        ("Sell or donate them", 2),
        ("Throw them away", 3),
        ("Keep them forever", 4),
    ], {
        1: "Great choice! Proper recycling recovers valuable materials.",
        2: "Good, extending the life of electronics through donation or sale is beneficial.",
        3: "Throwing away electronics harms the environment. Look for proper disposal options.",
        4: "Holding on indefinitely isn’t ideal; consider recycling if they’re not in use.",
    }),
    _q("Packaging", "How do you handle plastic packaging?", [
        ("Avoid plastic and use reusable containers", 1),
        ("Try to reduce plastic, but still buy some", 2),
        ("Often buy items with plastic packaging", 3),
        ("Buy a lot of plastic-packaged items", 4),
    ], {
        1: "Excellent! Avoiding plastic greatly reduces waste and pollution.",
        2: "Good effort, but further reduction in plastic use would be beneficial.",
        3: "Frequent plastic use increases waste; consider reusables where possible.",
        4: "High reliance on plastic is detrimental. Seek alternatives to reduce your impact.",
    }),
)


def empty_answers(questions: Sequence[Question] = QUESTIONS) -> List[int]:
    return [0] * len(questions)


def chosen_value(question: Question, answer) -> int:
    for opt in question.options:
        if opt.value == answer:
            return opt.value
    return 0


def score_answers(questions: Sequence[Question], answers: Sequence[int]) -> QuizScore:
    """
    Weighted score of a (possibly incomplete) answer list.

    Unanswered or unknown values count as 0 but the question still adds its
    worst value to the maximum, so skipping lowers the percentage.
    """
    total = 0
    maximum = 0
    for i, q in enumerate(questions):
        answer = answers[i] if i < len(answers) else 0
        total += chosen_value(q, answer)
        maximum += q.worst
    return QuizScore(total=total, maximum=maximum, percent=percent(total, maximum))


def tip_for(question: Question, value: Optional[int]) -> str:
    return question.tips.get(value) or TIP_FALLBACK


def set_answer(answers: Sequence[int], index: int, value: int) -> List[int]:
    updated = list(answers)
    updated[index] = value
    return updated


# wizard navigation
def next_index(index: int, count: int) -> int:
    return min(index + 1, max(count - 1, 0))


def previous_index(index: int) -> int:
    return max(index - 1, 0)


def is_last(index: int, count: int) -> bool:
    return index >= count - 1


def answers_frame(questions: Sequence[Question], answers: Sequence[int]) -> pd.DataFrame:
    rows = []
    for i, q in enumerate(questions):
        answer = answers[i] if i < len(answers) else 0
        rows.append({
            "category": q.category,
            "question": q.question,
            "chosen": chosen_value(q, answer),
            "best": q.best,
            "worst": q.worst,
            "tip": tip_for(q, answer),
        })
    return pd.DataFrame(rows, columns=["category", "question", "chosen", "best", "worst", "tip"])
