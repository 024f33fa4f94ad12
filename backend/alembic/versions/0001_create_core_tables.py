"""create core tables

Revision ID: 0001
Revises: None
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("daily_wage", sa.Numeric(12, 2), nullable=False),
        sa.Column("wage_change_date", sa.String(length=10), nullable=True),
        sa.Column("previous_wage", sa.Numeric(12, 2), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("start_date", sa.String(length=10), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_employees_id"), "employees", ["id"], unique=False)

    op.create_table(
        "work_days",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("employee_id", sa.String(length=64), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("worked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("custom_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_work_days_id"), "work_days", ["id"], unique=False)
    op.create_index(op.f("ix_work_days_employee_id"), "work_days", ["employee_id"], unique=False)
    op.create_index(op.f("ix_work_days_date"), "work_days", ["date"], unique=False)

    op.create_table(
        "payments",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("employee_id", sa.String(length=64), nullable=False),
        sa.Column("work_day_ids", sa.JSON(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("payment_type", sa.String(length=32), nullable=False, server_default="Bank Transfer"),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.String(length=40), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_payments_id"), "payments", ["id"], unique=False)
    op.create_index(op.f("ix_payments_employee_id"), "payments", ["employee_id"], unique=False)
    op.create_index(op.f("ix_payments_date"), "payments", ["date"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_payments_date"), table_name="payments")
    op.drop_index(op.f("ix_payments_employee_id"), table_name="payments")
    op.drop_index(op.f("ix_payments_id"), table_name="payments")
    op.drop_table("payments")
    op.drop_index(op.f("ix_work_days_date"), table_name="work_days")
    op.drop_index(op.f("ix_work_days_employee_id"), table_name="work_days")
    op.drop_index(op.f("ix_work_days_id"), table_name="work_days")
    op.drop_table("work_days")
    op.drop_index(op.f("ix_employees_id"), table_name="employees")
    op.drop_table("employees")
