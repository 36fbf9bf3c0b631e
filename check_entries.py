"""Check a user's recent journal entries and analytics in the live store.

Usage: python check_entries.py <user_id> [window]
"""
import asyncio
import sys

from dotenv import load_dotenv
load_dotenv()

from moodjournal.features.analytics.engine import summarize
from moodjournal.features.analytics.formatting import long_date
from moodjournal.features.database import get_database_client
from moodjournal.features.entries.store import EntryStore
from moodjournal.shared.constants import mood_option
from moodjournal.shared.correlation import CorrelationContext
from moodjournal.shared.logging_config import setup_logging


async def main(user_id: str, window: int):
    store = EntryStore(get_database_client().entries)
    entries = await store.load(user_id)

    print(f"Entries for {user_id}: {len(entries)}")
    print("-" * 80)
    for e in entries[:20]:
        mood = mood_option(e.mood)
        text = e.journal_text[:50].replace("\n", " ") if e.journal_text else "(no text)"
        insight = "✓" if e.insight_text else "✗"
        print(f"{mood.emoji} {long_date(e.created_at)}: {text} [insight {insight}]")

    summary = summarize(entries, window_size=window)
    print("\n\nAnalytics:")
    print("-" * 80)
    print(f"Average mood: {summary.average_mood}")
    print(f"Good days: {summary.good_days}")
    print("Trend: " + ", ".join(f"{p.date}={p.mood}" for p in summary.trend))
    for row in summary.correlations:
        print(f"  {row.icon} {row.label}: {row.avg_mood} ({row.count} entries)")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    setup_logging(service_name="check-entries", json_output=False)
    with CorrelationContext("check-entries"):
        asyncio.run(main(sys.argv[1], int(sys.argv[2]) if len(sys.argv) > 2 else 14))
