"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization and column patches
- Repository functions, one module per resource:
  chapters, vocabulary, grammar, quiz, reading, listening
"""

from nihongo.db.database import get_db, init_db

__all__ = ["get_db", "init_db"]
