"""SQLite connection and schema for running the backend tables locally."""

import sqlite3
from pathlib import Path
from typing import Union

NOW = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"
NEW_ID = "(lower(hex(randomblob(16))))"


class DatabaseManager:
    """Owns the SQLite connection and the stories/library/reads schema."""

    def __init__(self, db_path: Union[Path, str]) -> None:
        self.db_path = db_path
        self.connection = sqlite3.connect(str(db_path))
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys = ON;")

    def ensure_schema(self) -> None:
        """Create tables, indexes and triggers if they do not exist."""
        cur = self.connection.cursor()
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS profiles (
                user_id TEXT PRIMARY KEY,
                display_name TEXT,
                username TEXT UNIQUE,
                created_at TEXT NOT NULL DEFAULT {NOW}
            );
            """
        )
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS stories (
                id TEXT PRIMARY KEY DEFAULT {NEW_ID},
                title TEXT NOT NULL,
                description TEXT,
                genre TEXT,
                cover_image_url TEXT,
                author_id TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'draft'
                    CHECK (status IN ('draft', 'published', 'archived')),
                view_count INTEGER NOT NULL DEFAULT 0,
                like_count INTEGER NOT NULL DEFAULT 0,
                comment_count INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL DEFAULT {NOW},
                updated_at TEXT NOT NULL DEFAULT {NOW}
            );
            """
        )
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS story_tags (
                id TEXT PRIMARY KEY DEFAULT {NEW_ID},
                story_id TEXT NOT NULL,
                tag TEXT NOT NULL,

                FOREIGN KEY(story_id) REFERENCES stories(id) ON DELETE CASCADE,
                UNIQUE(story_id, tag)
            );
            """
        )
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS library (
                id TEXT PRIMARY KEY DEFAULT {NEW_ID},
                user_id TEXT NOT NULL,
                story_id TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT {NOW},

                FOREIGN KEY(story_id) REFERENCES stories(id) ON DELETE CASCADE,
                UNIQUE(user_id, story_id)
            );
            """
        )
        # No foreign key: progress rows may reference deleted stories.
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS reads (
                id TEXT PRIMARY KEY DEFAULT {NEW_ID},
                user_id TEXT NOT NULL,
                story_id TEXT NOT NULL,
                chapter_id TEXT,
                progress REAL NOT NULL DEFAULT 0,
                updated_at TEXT NOT NULL DEFAULT {NOW}
            );
            """
        )
        cur.execute(
            f"""
            CREATE TRIGGER IF NOT EXISTS stories_touch_updated_at
            AFTER UPDATE ON stories
            FOR EACH ROW WHEN NEW.updated_at = OLD.updated_at
            BEGIN
                UPDATE stories SET updated_at = {NOW} WHERE id = NEW.id;
            END;
            """
        )
        cur.execute(
            f"""
            CREATE TRIGGER IF NOT EXISTS reads_touch_updated_at
            AFTER UPDATE ON reads
            FOR EACH ROW WHEN NEW.updated_at = OLD.updated_at
            BEGIN
                UPDATE reads SET updated_at = {NOW} WHERE id = NEW.id;
            END;
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_stories_author
            ON stories(author_id);
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_reads_user_story
            ON reads(user_id, story_id);
            """
        )
        self.connection.commit()

    def close(self) -> None:
        self.connection.close()
