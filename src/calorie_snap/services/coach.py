"""Nutrition coach chat."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from calorie_snap.domain.chat import ChatMessage, ChatRole
from calorie_snap.domain.logs import DailyLog
from calorie_snap.domain.profile import UserProfile
from calorie_snap.services.advice import AdviceResponder
from calorie_snap.services.estimation import Clock, IdGenerator, new_id, utc_now

COACH_INSTRUCTIONS = (
    "You are a friendly, motivating, and knowledgeable AI Nutrition Coach. "
    "Keep answers concise, encouraging, and practical. Use the user's data to "
    "give specific advice."
)
EMPTY_REPLY = "I'm sorry, I couldn't process that request."

_logger = logging.getLogger(__name__)


class CoachClient(Protocol):
    """Interface for model-backed coach replies."""

    async def reply(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        prompt: str,
    ) -> str:
        """Return the model's answer text."""


@dataclass
class CoachService:
    """Keeps the chat history and answers user messages."""

    responder: AdviceResponder
    client: CoachClient | None = None
    model: str = "gpt-5.2"
    reasoning_effort: str | None = None
    store: bool = False
    history: list[ChatMessage] = field(default_factory=list)
    id_generator: IdGenerator = new_id
    clock: Clock = utc_now

    async def send(
        self, text: str, profile: UserProfile, today_log: DailyLog
    ) -> ChatMessage:
        """Record a user message and return the coach reply."""
        prior = list(self.history)
        self._append("user", text)
        answer = await self._answer(text, profile, today_log, prior)
        return self._append("model", answer)

    async def _answer(
        self,
        text: str,
        profile: UserProfile,
        today_log: DailyLog,
        prior: list[ChatMessage],
    ) -> str:
        if self.client is not None:
            try:
                answer = await self.client.reply(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    instructions=COACH_INSTRUCTIONS,
                    prompt=build_coach_prompt(text, profile, today_log),
                )
            except Exception as exc:  # noqa: BLE001
                _logger.warning("Remote coach failed, using local rules: %s", exc)
            else:
                return answer or EMPTY_REPLY
        return self.responder.respond(text, profile, today_log, prior)

    def _append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(
            id=self.id_generator(), role=role, text=text, timestamp=self.clock()
        )
        self.history.append(message)
        return message


def build_coach_prompt(text: str, profile: UserProfile, today_log: DailyLog) -> str:
    """Build the prompt with the user's targets and today's intake."""
    consumed = today_log.totals().calories
    return (
        "User Profile:\n"
        f"Name: {profile.name}\n"
        f"Goal: {profile.goal}\n"
        f"Daily Targets: {profile.calorie_target:.0f}kcal "
        f"({profile.protein_target:.0f}g P, {profile.fat_target:.0f}g F, "
        f"{profile.carbs_target:.0f}g C)\n\n"
        "Today's Consumption So Far:\n"
        f"Calories: {consumed:.0f}\n"
        f"Water: {today_log.water_intake_ml:.0f}ml\n\n"
        f'User Question: "{text}"'
    )
