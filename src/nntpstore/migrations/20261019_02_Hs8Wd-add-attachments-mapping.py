from yoyo import step

__depends__: set[str] = {"20261019_01_Nq4Tz-initial-schema"}

steps = [
    step(
        """
        CREATE TABLE attachments_articles_mapping (
            article_id INTEGER NOT NULL REFERENCES articles (id),
            content_type VARCHAR NOT NULL,
            attachment_id VARCHAR NOT NULL
        )
        """,
        "DROP TABLE attachments_articles_mapping",
    ),
    step(
        """
        CREATE INDEX ix_attachments_articles_mapping_article_id
        ON attachments_articles_mapping (article_id)
        """,
        "DROP INDEX ix_attachments_articles_mapping_article_id",
    ),
]
