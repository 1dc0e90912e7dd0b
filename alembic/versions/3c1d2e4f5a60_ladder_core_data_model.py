"""ladder_core_data_model

Revision ID: 3c1d2e4f5a60
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "3c1d2e4f5a60"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.CheckConstraint("balance >= 0", name="ck_users_balance_non_negative"),
    )
    op.create_index("idx_users_created_at", "users", ["created_at"])

    op.create_table(
        "quiz_questions",
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("level", sa.SmallInteger(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("option_1", sa.Text(), nullable=False),
        sa.Column("option_2", sa.Text(), nullable=False),
        sa.Column("option_3", sa.Text(), nullable=False),
        sa.Column("option_4", sa.Text(), nullable=False),
        sa.Column("correct_option_id", sa.SmallInteger(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "correct_option_id >= 0 AND correct_option_id <= 3",
            name="ck_quiz_questions_correct_option_range",
        ),
        sa.CheckConstraint("level >= 0", name="ck_quiz_questions_level_non_negative"),
        sa.CheckConstraint("status IN ('ACTIVE','DISABLED')", name="ck_quiz_questions_status"),
        sa.PrimaryKeyConstraint("question_id"),
    )
    op.create_index("idx_quiz_questions_level_status", "quiz_questions", ["level", "status"])

    op.create_table(
        "ladder_games",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("current_level", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("prize", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "used_lifelines",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("questions", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('in_progress','won','fail','timeout','money')",
            name="ck_ladder_games_status",
        ),
        sa.CheckConstraint("current_level >= 0", name="ck_ladder_games_current_level_non_negative"),
        sa.CheckConstraint("prize >= 0", name="ck_ladder_games_prize_non_negative"),
        sa.CheckConstraint(
            "(status = 'in_progress') = (finished_at IS NULL)",
            name="ck_ladder_games_finished_at_consistency",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("idx_ladder_games_user_created", "ladder_games", ["user_id", "created_at"])
    op.create_index(
        "uq_ladder_games_user_in_progress",
        "ladder_games",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("status = 'in_progress'"),
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("game_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("entry_type", sa.String(32), nullable=False),
        sa.Column("direction", sa.String(8), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("balance_after", sa.BigInteger(), nullable=True),
        sa.Column("idempotency_key", sa.String(96), nullable=False),
        sa.Column(
            "metadata",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("amount > 0", name="ck_ledger_entries_amount_positive"),
        sa.CheckConstraint("direction IN ('CREDIT','DEBIT')", name="ck_ledger_entries_direction"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["game_id"], ["ladder_games.id"]),
        sa.UniqueConstraint("idempotency_key", name="uq_ledger_entries_idempotency_key"),
    )
    op.create_index("idx_ledger_user_created", "ledger_entries", ["user_id", "created_at"])
    op.create_index("idx_ledger_game", "ledger_entries", ["game_id"])


def downgrade() -> None:
    op.drop_index("idx_ledger_game", table_name="ledger_entries")
    op.drop_index("idx_ledger_user_created", table_name="ledger_entries")
    op.drop_table("ledger_entries")

    op.drop_index("uq_ladder_games_user_in_progress", table_name="ladder_games")
    op.drop_index("idx_ladder_games_user_created", table_name="ladder_games")
    op.drop_table("ladder_games")

    op.drop_index("idx_quiz_questions_level_status", table_name="quiz_questions")
    op.drop_table("quiz_questions")

    op.drop_index("idx_users_created_at", table_name="users")
    op.drop_table("users")
