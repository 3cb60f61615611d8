"""initial_schema

Tables users, pro_profiles et webhook_deliveries.

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-01-10 09:00:00.000000+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


USER_ROLE = sa.Enum('CLIENT', 'PRO', name='user_role')
ONBOARDING_STEP = sa.Enum(
    'ENTERPRISE_INFO', 'PROFESSIONAL_INFO', 'LOCATION', 'MEDIA', 'COMPLETED',
    name='onboarding_step_enum',
)
VALIDATION_STATUS = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='validation_status_enum')

JSON_LIST = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql')


def upgrade() -> None:
    # =========================================================================
    # USERS
    # =========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', USER_ROLE, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        comment='Utilisateurs synchronisés depuis Clerk (clients et professionnels)',
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # =========================================================================
    # PRO_PROFILES
    # =========================================================================
    op.create_table(
        'pro_profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('business_name', sa.String(length=200), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profession', sa.String(length=100), nullable=True),
        sa.Column('experience', sa.Integer(), nullable=True),
        sa.Column('certifications', JSON_LIST, nullable=False),
        sa.Column('siret', sa.String(length=14), nullable=True),
        sa.Column('corporate_name', sa.String(length=200), nullable=True),
        sa.Column('legal_form', sa.String(length=50), nullable=True),
        sa.Column('legal_status', sa.String(length=50), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('postal_code', sa.String(length=10), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('radius', sa.Integer(), nullable=True),
        sa.Column('photos', JSON_LIST, nullable=False),
        sa.Column('onboarding_step', ONBOARDING_STEP, nullable=False),
        sa.Column('onboarding_progress', sa.Integer(), nullable=False),
        sa.Column('onboarding_complete', sa.Boolean(), nullable=False),
        sa.Column('validation_status', VALIDATION_STATUS, nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_premium', sa.Boolean(), nullable=False),
        sa.Column('subscription_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('experience IS NULL OR experience >= 0', name='ck_pro_profiles_experience'),
        sa.CheckConstraint('radius IS NULL OR radius >= 0', name='ck_pro_profiles_radius'),
        sa.CheckConstraint('review_count >= 0', name='ck_pro_profiles_review_count'),
        sa.CheckConstraint(
            'onboarding_progress >= 0 AND onboarding_progress <= 100',
            name='ck_pro_profiles_onboarding_progress',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        comment='Profils professionnels (onboarding, modération, premium)',
    )
    op.create_index(op.f('ix_pro_profiles_user_id'), 'pro_profiles', ['user_id'], unique=True)
    op.create_index(op.f('ix_pro_profiles_profession'), 'pro_profiles', ['profession'], unique=False)
    op.create_index(op.f('ix_pro_profiles_city'), 'pro_profiles', ['city'], unique=False)
    op.create_index(op.f('ix_pro_profiles_validation_status'), 'pro_profiles', ['validation_status'], unique=False)
    op.create_index(op.f('ix_pro_profiles_is_active'), 'pro_profiles', ['is_active'], unique=False)
    op.create_index(op.f('ix_pro_profiles_is_premium'), 'pro_profiles', ['is_premium'], unique=False)

    # =========================================================================
    # WEBHOOK_DELIVERIES
    # =========================================================================
    op.create_table(
        'webhook_deliveries',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('event_type', sa.String(length=100), nullable=False),
        sa.Column('received_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        comment='Webhooks Clerk déjà traités (déduplication des relivraisons)',
    )


def downgrade() -> None:
    op.drop_table('webhook_deliveries')

    op.drop_index(op.f('ix_pro_profiles_is_premium'), table_name='pro_profiles')
    op.drop_index(op.f('ix_pro_profiles_is_active'), table_name='pro_profiles')
    op.drop_index(op.f('ix_pro_profiles_validation_status'), table_name='pro_profiles')
    op.drop_index(op.f('ix_pro_profiles_city'), table_name='pro_profiles')
    op.drop_index(op.f('ix_pro_profiles_profession'), table_name='pro_profiles')
    op.drop_index(op.f('ix_pro_profiles_user_id'), table_name='pro_profiles')
    op.drop_table('pro_profiles')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')

    VALIDATION_STATUS.drop(op.get_bind(), checkfirst=True)
    ONBOARDING_STEP.drop(op.get_bind(), checkfirst=True)
    USER_ROLE.drop(op.get_bind(), checkfirst=True)
