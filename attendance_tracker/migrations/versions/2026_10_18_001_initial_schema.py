"""Initial schema: companies, users, kiosks, employees, attendance_logs

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

Tables that already exist are left untouched so stores created before
migrations were tracked can be adopted.
"""
from alembic import op
import sqlalchemy as sa
import structlog

# revision identifiers
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

logger = structlog.get_logger(__name__)


def _existing_tables():
    return set(sa.inspect(op.get_bind()).get_table_names())


def upgrade():
    existing = _existing_tables()

    if 'companies' not in existing:
        op.create_table(
            'companies',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('subscription_plan', sa.String(50), nullable=False, server_default='tier1'),
            sa.Column('max_employees', sa.Integer(), nullable=False, server_default='5'),
            sa.Column('subscription_status', sa.String(50), nullable=False, server_default='active'),
            sa.Column('stripe_customer_id', sa.String(255), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        )
        op.create_index('ix_companies_name', 'companies', ['name'], unique=True)
        op.create_index('ix_companies_stripe_customer_id', 'companies', ['stripe_customer_id'])
        logger.info("Created table companies")

    if 'users' not in existing:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
            sa.Column('email', sa.String(255), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        )
        op.create_index('ix_users_company_id', 'users', ['company_id'])
        op.create_index('ix_users_email', 'users', ['email'], unique=True)
        logger.info("Created table users")

    if 'kiosks' not in existing:
        op.create_table(
            'kiosks',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('api_key', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        )
        op.create_index('ix_kiosks_company_id', 'kiosks', ['company_id'])
        op.create_index('ix_kiosks_api_key', 'kiosks', ['api_key'], unique=True)
        logger.info("Created table kiosks")

    if 'employees' not in existing:
        op.create_table(
            'employees',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('nfc_card_id', sa.String(255), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
            sa.UniqueConstraint('company_id', 'nfc_card_id', name='uq_employees_company_card'),
        )
        op.create_index('ix_employees_company_id', 'employees', ['company_id'])
        logger.info("Created table employees")

    if 'attendance_logs' not in existing:
        op.create_table(
            'attendance_logs',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
            sa.Column('employee_id', sa.Integer(), nullable=False),
            sa.Column('kiosk_id', sa.Integer(), sa.ForeignKey('kiosks.id'), nullable=True),
            sa.Column('nfc_card_id', sa.String(255), nullable=False),
            sa.Column('event_type', sa.String(20), nullable=False),
            sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        )
        op.create_index('ix_attendance_logs_company_id', 'attendance_logs', ['company_id'])
        op.create_index('ix_attendance_logs_employee_id', 'attendance_logs', ['employee_id'])
        op.create_index('ix_attendance_logs_timestamp', 'attendance_logs', ['timestamp'])
        logger.info("Created table attendance_logs")


def downgrade():
    op.drop_table('attendance_logs')
    op.drop_table('employees')
    op.drop_table('kiosks')
    op.drop_table('users')
    op.drop_table('companies')
