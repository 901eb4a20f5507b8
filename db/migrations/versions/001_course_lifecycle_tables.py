"""Course lifecycle & billing tables.

- organizations, course_types (reference data, read-only here)
- courses with status check, unique course_number, one booked course per
  instructor and day (partial unique index)
- students (cascade with course)
- instructor_availability
- pricing_rules unique per (organization, course type)
- invoices unique per course, payments
"""

from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = "001_course_lifecycle"
down_revision = None
branch_labels = None
depends_on = None

COURSE_STATUSES = ("pending", "scheduled", "completed", "billing_ready", "invoiced", "cancelled")
BOOKED_FILTER = "status IN ('completed', 'scheduled')"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    # ---------- reference data ----------
    for table in ("organizations", "course_types"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer, autoincrement=True),
            sa.Column("name", sa.String(200), nullable=False),
            sa.Column("code", sa.String(20), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint("id", name=f"pk_{table}"),
            sa.UniqueConstraint("code", name=f"uq_{table}_code"),
        )

    # ---------- courses ----------
    statuses = ", ".join(f"'{s}'" for s in COURSE_STATUSES)
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("course_number", sa.String(64), nullable=False),
        sa.Column("organization_id", sa.Integer, nullable=False),
        sa.Column("course_type_id", sa.Integer, nullable=False),
        sa.Column("instructor_id", sa.Integer, nullable=True),
        sa.Column("date_requested", sa.Date, nullable=False),
        sa.Column("date_scheduled", sa.Date, nullable=True),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("students_registered", sa.Integer, nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_courses"),
        sa.UniqueConstraint("course_number", name="uq_courses_course_number"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], name="fk_courses_organization_id_organizations"
        ),
        sa.ForeignKeyConstraint(
            ["course_type_id"], ["course_types.id"], name="fk_courses_course_type_id_course_types"
        ),
        sa.CheckConstraint(f"status IN ({statuses})", name="ck_courses_status_valid"),
        sa.CheckConstraint(
            "students_registered >= 0", name="ck_courses_students_registered_non_negative"
        ),
    )
    op.create_index("ix_courses_organization_id", "courses", ["organization_id"])
    op.create_index("ix_courses_status_created", "courses", ["status", "created_at"])
    op.create_index(
        "uq_courses_instructor_id_date_scheduled",
        "courses",
        ["instructor_id", "date_scheduled"],
        unique=True,
        postgresql_where=sa.text(BOOKED_FILTER),
        sqlite_where=sa.text(BOOKED_FILTER),
    )

    # ---------- students ----------
    op.create_table(
        "students",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("course_id", sa.Integer, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("attended", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_students"),
        sa.ForeignKeyConstraint(
            ["course_id"], ["courses.id"], name="fk_students_course_id_courses", ondelete="CASCADE"
        ),
    )
    op.create_index("ix_students_course_id", "students", ["course_id"])

    # ---------- instructor availability ----------
    op.create_table(
        "instructor_availability",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("instructor_id", sa.Integer, nullable=False),
        sa.Column("available_date", sa.Date, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_instructor_availability"),
        sa.UniqueConstraint(
            "instructor_id",
            "available_date",
            name="uq_instructor_availability_instructor_id_available_date",
        ),
    )
    op.create_index(
        "ix_instructor_availability_instructor_id", "instructor_availability", ["instructor_id"]
    )

    # ---------- pricing rules ----------
    op.create_table(
        "pricing_rules",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("organization_id", sa.Integer, nullable=False),
        sa.Column("course_type_id", sa.Integer, nullable=False),
        sa.Column("price", sa.Numeric(12, 4), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_pricing_rules"),
        sa.UniqueConstraint(
            "organization_id", "course_type_id", name="uq_pricing_rules_organization_id_course_type_id"
        ),
        sa.ForeignKeyConstraint(
            ["organization_id"],
            ["organizations.id"],
            name="fk_pricing_rules_organization_id_organizations",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["course_type_id"],
            ["course_types.id"],
            name="fk_pricing_rules_course_type_id_course_types",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint("price >= 0", name="ck_pricing_rules_price_non_negative"),
    )

    # ---------- invoices ----------
    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("invoice_number", sa.String(50), nullable=False),
        sa.Column("course_id", sa.Integer, nullable=False),
        sa.Column("invoice_date", sa.Date, nullable=False),
        sa.Column("due_date", sa.Date, nullable=False),
        sa.Column("amount", sa.Numeric(12, 4), nullable=False),
        sa.Column("attended_count", sa.Integer, nullable=False),
        sa.Column("payment_status", sa.String(20), nullable=False),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_invoices"),
        sa.UniqueConstraint("invoice_number", name="uq_invoices_invoice_number"),
        sa.UniqueConstraint("course_id", name="uq_invoices_course_id"),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], name="fk_invoices_course_id_courses"),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'paid')", name="ck_invoices_payment_status_valid"
        ),
    )

    # ---------- payments ----------
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer, autoincrement=True),
        sa.Column("invoice_id", sa.Integer, nullable=False),
        sa.Column("amount", sa.Numeric(12, 4), nullable=False),
        sa.Column("payment_date", sa.Date, nullable=False),
        sa.Column("method", sa.String(50), nullable=True),
        sa.Column("reference", sa.String(100), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_payments"),
        sa.ForeignKeyConstraint(
            ["invoice_id"], ["invoices.id"], name="fk_payments_invoice_id_invoices", ondelete="CASCADE"
        ),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
    op.create_index("ix_payments_invoice_id", "payments", ["invoice_id"])


def downgrade():
    op.drop_index("ix_payments_invoice_id", table_name="payments")
    op.drop_table("payments")
    op.drop_table("invoices")
    op.drop_table("pricing_rules")
    op.drop_index("ix_instructor_availability_instructor_id", table_name="instructor_availability")
    op.drop_table("instructor_availability")
    op.drop_index("ix_students_course_id", table_name="students")
    op.drop_table("students")
    op.drop_index("uq_courses_instructor_id_date_scheduled", table_name="courses")
    op.drop_index("ix_courses_status_created", table_name="courses")
    op.drop_index("ix_courses_organization_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("course_types")
    op.drop_table("organizations")
