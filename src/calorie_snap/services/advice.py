"""Rule-based nutrition coach answers computed from today's log."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from calorie_snap.domain.chat import ChatMessage
from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.profile import UserProfile

STATUS_KEYWORDS = ("how am i doing", "status", "summary")
WATER_KEYWORDS = ("water",)
PROTEIN_KEYWORDS = ("protein",)
SNACK_KEYWORDS = ("hungry", "snack")

PLENTY_REMAINING_KCAL = 500

_GOAL_PHRASES = {
    "lose": "lose weight",
    "maintain": "maintain your weight",
    "gain": "gain weight",
}


@dataclass
class AdviceResponder:
    """Answers coach questions with fixed keyword rules.

    Rules are checked in order and the first match wins: status, water,
    protein, snacks, then a generic fallback.
    """

    def respond(
        self,
        message: str,
        profile: UserProfile,
        today_log: DailyLog,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        """Return the coach answer for a user message."""
        text = message.lower()
        if _contains_any(text, STATUS_KEYWORDS):
            return _status_answer(profile, today_log)
        if _contains_any(text, WATER_KEYWORDS):
            return _water_answer(today_log)
        if _contains_any(text, PROTEIN_KEYWORDS):
            return _protein_answer(profile, today_log)
        if _contains_any(text, SNACK_KEYWORDS):
            return (
                "Try a high-fiber snack like an apple with a handful of almonds "
                "or Greek yogurt with berries. Fiber and protein keep you full "
                "for longer."
            )
        return _fallback_answer(profile)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _status_answer(profile: UserProfile, today_log: DailyLog) -> str:
    consumed = sum(meal.total_calories for meal in today_log.meals)
    remaining = math.ceil(profile.calorie_target - consumed)
    if remaining > PLENTY_REMAINING_KCAL:
        return (
            f"You're doing great, {profile.name}! You still have "
            f"{remaining} kcal left today. Build your next meal around "
            "lean protein and vegetables."
        )
    if remaining > 0:
        return (
            f"You're close to your goal! Only {remaining} kcal remaining "
            "today, so keep the rest of the day light."
        )
    return (
        "You've reached your calorie goal for today. If you're still hungry, "
        "stick to vegetables and water."
    )


def _water_answer(today_log: DailyLog) -> str:
    return (
        f"You've logged {today_log.water_intake_ml:.0f} ml of water today. "
        "Most adults should aim for 2000-3000 ml a day, more when active."
    )


def _protein_answer(profile: UserProfile, today_log: DailyLog) -> str:
    consumed = sum(meal.total_protein_g for meal in today_log.meals)
    target = profile.protein_target
    if consumed < target:
        return (
            f"You've had {consumed:.0f} g of protein out of your {target:.0f} g "
            f"target. Eggs, chicken or tofu can help close the "
            f"{target - consumed:.0f} g gap."
        )
    return (
        f"Excellent! You've eaten {consumed:.0f} g of protein and met your "
        f"{target:.0f} g target."
    )


def _fallback_answer(profile: UserProfile) -> str:
    goal = _GOAL_PHRASES.get(profile.goal, profile.goal)
    return (
        f"I'm here to help you {goal}. Keep logging your meals consistently "
        "and ask me about your status, water, protein or snacks."
    )
