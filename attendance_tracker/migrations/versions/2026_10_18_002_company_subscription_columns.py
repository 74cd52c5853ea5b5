"""Add subscription columns to companies created under the original schema

Revision ID: 002_company_subscription
Revises: 001_initial_schema
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa
import structlog

# revision identifiers
revision = '002_company_subscription'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None

logger = structlog.get_logger(__name__)


def subscription_columns():
    return [
        sa.Column('subscription_plan', sa.String(50), nullable=False, server_default='tier1'),
        sa.Column('max_employees', sa.Integer(), nullable=False, server_default='5'),
        sa.Column('subscription_status', sa.String(50), nullable=False, server_default='active'),
        sa.Column('stripe_customer_id', sa.String(255), nullable=True),
    ]


def upgrade():
    present = {column['name'] for column in sa.inspect(op.get_bind()).get_columns('companies')}

    for column in subscription_columns():
        if column.name in present:
            continue
        logger.info(f"MIGRATION: '{column.name}' column not found on companies, adding it")
        op.add_column('companies', column)

    if 'stripe_customer_id' not in present:
        op.create_index('ix_companies_stripe_customer_id', 'companies', ['stripe_customer_id'])


def downgrade():
    # Columns are part of the 001 schema for fresh stores; nothing to undo
    pass
