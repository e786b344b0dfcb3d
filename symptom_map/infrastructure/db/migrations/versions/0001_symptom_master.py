"""Symptom master table"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_symptom_master"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "symptom_master",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("body_part", sa.String(), nullable=False),
        sa.Column("symptoms", sa.Text(), nullable=False, server_default=""),
        sa.Column("short_summary", sa.Text()),
        sa.Column("probable_diagnosis", sa.Text()),
        sa.Column("basic_investigations", sa.Text()),
        sa.Column("common_treatments", sa.Text()),
        sa.Column(
            "prescription_yn",
            sa.String(length=1),
            sa.CheckConstraint("prescription_yn in ('Y','N')", name="ck_symptom_master_prescription_yn"),
            nullable=False,
            server_default="N",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("(CURRENT_TIMESTAMP)")),
    )
    op.create_index("ix_symptom_master_body_part", "symptom_master", ["body_part"])


def downgrade() -> None:
    op.drop_index("ix_symptom_master_body_part", table_name="symptom_master")
    op.drop_table("symptom_master")
