"""Supabase repository for the state blob."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from calorie_snap.services.state import StateRepository


@dataclass
class SupabaseStateRepository(StateRepository):
    """Supabase key-value table implementation."""

    client: Client
    table: str = "app_state"

    def get(self, key: str) -> str | None:
        """Return the stored blob for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: str) -> None:
        """Insert or replace the blob for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
