"""Student dashboard: courses and tasks on Supabase."""

__version__ = "0.1.0"
