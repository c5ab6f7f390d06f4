from yoyo import step

__depends__: set[str] = set()

steps = [
    step(
        """
        CREATE TABLE newsgroups (
            id INTEGER NOT NULL,
            group_name VARCHAR NOT NULL,
            created_at REAL NOT NULL,
            PRIMARY KEY (id)
        )
        """,
        "DROP TABLE newsgroups",
    ),
    step(
        "CREATE UNIQUE INDEX ix_newsgroups_group_name ON newsgroups (group_name)",
        "DROP INDEX ix_newsgroups_group_name",
    ),
    step(
        "CREATE INDEX ix_newsgroups_created_at ON newsgroups (created_at)",
        "DROP INDEX ix_newsgroups_created_at",
    ),
    step(
        """
        CREATE TABLE articles (
            id INTEGER NOT NULL,
            message_id VARCHAR NOT NULL,
            header VARCHAR NOT NULL,
            body VARCHAR NOT NULL,
            thread VARCHAR,
            created_at REAL NOT NULL,
            PRIMARY KEY (id)
        )
        """,
        "DROP TABLE articles",
    ),
    step(
        "CREATE UNIQUE INDEX ix_articles_message_id ON articles (message_id)",
        "DROP INDEX ix_articles_message_id",
    ),
    step(
        "CREATE INDEX ix_articles_thread ON articles (thread)",
        "DROP INDEX ix_articles_thread",
    ),
    step(
        "CREATE INDEX ix_articles_created_at ON articles (created_at)",
        "DROP INDEX ix_articles_created_at",
    ),
    step(
        """
        CREATE TABLE articles_to_groups (
            article_id INTEGER NOT NULL REFERENCES articles (id),
            group_id INTEGER NOT NULL REFERENCES newsgroups (id),
            article_number INTEGER NOT NULL,
            PRIMARY KEY (article_id, group_id)
        )
        """,
        "DROP TABLE articles_to_groups",
    ),
    step(
        """
        CREATE UNIQUE INDEX ix_articles_to_groups_number
        ON articles_to_groups (group_id, article_number)
        """,
        "DROP INDEX ix_articles_to_groups_number",
    ),
]
