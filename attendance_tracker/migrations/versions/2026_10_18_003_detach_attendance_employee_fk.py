"""Drop the employee foreign key from attendance_logs created under the original schema

Revision ID: 003_detach_attendance_employee
Revises: 002_company_subscription
Create Date: 2026-10-18

Attendance history outlives the employee it describes. Older stores declared
attendance_logs.employee_id as a foreign key to employees, which blocks
deleting anyone who has ever tapped once foreign keys are enforced.
"""
from alembic import op
import sqlalchemy as sa
import structlog

# revision identifiers
revision = '003_detach_attendance_employee'
down_revision = '002_company_subscription'
branch_labels = None
depends_on = None

logger = structlog.get_logger(__name__)

# Names reflected foreign keys when SQLite reports them unnamed
NAMING_CONVENTION = {
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
}


def _employee_foreign_keys(bind):
    return [
        fk for fk in sa.inspect(bind).get_foreign_keys('attendance_logs')
        if fk['referred_table'] == 'employees' and fk['constrained_columns'] == ['employee_id']
    ]


def upgrade():
    bind = op.get_bind()
    foreign_keys = _employee_foreign_keys(bind)
    if not foreign_keys:
        return

    logger.info("MIGRATION: attendance_logs.employee_id references employees, dropping the constraint")

    if bind.dialect.name == 'sqlite':
        with op.batch_alter_table(
            'attendance_logs',
            recreate='always',
            naming_convention=NAMING_CONVENTION,
        ) as batch_op:
            batch_op.drop_constraint('fk_attendance_logs_employee_id_employees', type_='foreignkey')
    else:
        for fk in foreign_keys:
            op.drop_constraint(fk['name'], 'attendance_logs', type_='foreignkey')

    existing_indexes = {index['name'] for index in sa.inspect(bind).get_indexes('attendance_logs')}
    for name, columns in (
        ('ix_attendance_logs_company_id', ['company_id']),
        ('ix_attendance_logs_employee_id', ['employee_id']),
        ('ix_attendance_logs_timestamp', ['timestamp']),
    ):
        if name not in existing_indexes:
            op.create_index(name, 'attendance_logs', columns)


def downgrade():
    # The constraint is never restored: logs of deleted employees would violate it
    pass
