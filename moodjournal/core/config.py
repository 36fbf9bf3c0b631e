import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_SUPABASE_URL = os.getenv('SUPABASE_URL')
_SUPABASE_KEY = os.getenv('SUPABASE_KEY')

_ENTRIES_TABLE = os.getenv('ENTRIES_TABLE', 'journal_entries')
_PROFILES_TABLE = os.getenv('PROFILES_TABLE', 'user_profiles')

_INSIGHTS_API_URL = os.getenv('INSIGHTS_API_URL', 'http://localhost:5000')
_INSIGHTS_PATH = os.getenv('INSIGHTS_PATH', '/api/ai-insights')
_INSIGHT_TIMEOUT_SECONDS = float(os.getenv('INSIGHT_TIMEOUT_SECONDS', '30'))

_TREND_WINDOW_SIZE = int(os.getenv('TREND_WINDOW_SIZE', '14'))
_RECENT_CONTEXT_ENTRIES = int(os.getenv('RECENT_CONTEXT_ENTRIES', '3'))
_RECENT_TEXT_EXCERPT = int(os.getenv('RECENT_TEXT_EXCERPT', '100'))

_MAX_WORKSPACES = int(os.getenv('MAX_WORKSPACES', '256'))


class Config:
    """Central configuration for the mood journal."""

    SUPABASE_URL = _SUPABASE_URL
    SUPABASE_KEY = _SUPABASE_KEY

    ENTRIES_TABLE = _ENTRIES_TABLE
    PROFILES_TABLE = _PROFILES_TABLE

    INSIGHTS_API_URL = _INSIGHTS_API_URL
    INSIGHTS_PATH = _INSIGHTS_PATH
    INSIGHT_TIMEOUT_SECONDS = _INSIGHT_TIMEOUT_SECONDS

    TREND_WINDOW_SIZE = _TREND_WINDOW_SIZE
    RECENT_CONTEXT_ENTRIES = _RECENT_CONTEXT_ENTRIES
    RECENT_TEXT_EXCERPT = _RECENT_TEXT_EXCERPT

    MAX_WORKSPACES = _MAX_WORKSPACES

    @property
    def insights_url(self) -> str:
        return f"{self.INSIGHTS_API_URL.rstrip('/')}{self.INSIGHTS_PATH}"


settings = Config()
