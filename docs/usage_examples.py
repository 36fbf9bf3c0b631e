"""
Usage Examples for the Mood Journal Library

Walks through one check-in the way a presentation layer drives the core:
sign in, let the SessionContext load the journal, compose a draft, ask for
an insight, save, read analytics, delete.

Needs SUPABASE_URL / SUPABASE_KEY / INSIGHTS_API_URL and an existing account:
    python docs/usage_examples.py you@example.com password
"""

import asyncio
import sys

from moodjournal.features.analytics.engine import summarize
from moodjournal.features.checkin.service import CheckInService
from moodjournal.features.database import get_database_client
from moodjournal.features.entries.models import DraftCheckIn
from moodjournal.features.entries.store import EntryStore
from moodjournal.features.insights.orchestrator import InsightOrchestrator
from moodjournal.features.session.context import SessionContext
from moodjournal.features.session.provider import SupabaseSessionProvider
from moodjournal.services.http_client import http_client_manager


async def main(email: str, password: str):
    db = get_database_client()
    provider = SupabaseSessionProvider(db.client)
    store = EntryStore(db.entries)
    session = SessionContext(store, db.profiles, provider)
    checkin = CheckInService(store, InsightOrchestrator())

    # ========================================================================
    # EXAMPLE 1: Signing in loads the profile and the entries
    # ========================================================================
    provider.sign_in(email, password)
    await session.start()
    print(f"✓ Signed in as {session.display_name}, {len(store.entries)} entries")

    # ========================================================================
    # EXAMPLE 2: Composing a draft and asking for an insight
    # ========================================================================
    draft = DraftCheckIn()
    print(f"Prompt: {draft.prompt}")
    draft.set_mood(4)
    draft.toggle_activity("exercise")
    draft.toggle_activity("sleep")
    draft.set_text("Went for a long walk before work and felt clear-headed all day.")

    insight = await checkin.get_insights(draft)
    print(f"✓ Insight: {insight}")

    # ========================================================================
    # EXAMPLE 3: Saving (the insight above is reused, no second call)
    # ========================================================================
    entry = await checkin.save(session.user_id, draft)
    print(f"✓ Saved entry {entry.id} at {entry.created_at}")
    assert store.entries[0].id == entry.id

    # ========================================================================
    # EXAMPLE 4: Analytics over the current snapshot
    # ========================================================================
    summary = summarize(store.entries)
    print(f"✓ Average mood {summary.average_mood}, {summary.good_days} good days")
    for row in summary.correlations:
        print(f"  {row.icon} {row.label}: {row.avg_mood} over {row.count} entries")

    # ========================================================================
    # EXAMPLE 5: Deleting the example entry, then signing out
    # ========================================================================
    await store.delete(session.user_id, entry.id)
    print(f"✓ Deleted {entry.id}")

    await session.set_identity(None)
    provider.sign_out()
    await session.close()
    await http_client_manager.shutdown()
    print("✓ Signed out, journal cleared")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
