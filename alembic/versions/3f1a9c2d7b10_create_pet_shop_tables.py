"""create_pet_shop_tables

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2026-10-16 10:12:04.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, pets and adoption_applications tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(1024), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_superuser', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'pets',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('species', sa.String(100), nullable=False),
        sa.Column('breed', sa.String(100), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('gender', sa.String(20), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('available', 'pending', 'adopted')",
            name='ck_pets_status'
        ),
    )
    op.create_index('ix_pets_species', 'pets', ['species'])
    op.create_index('ix_pets_status', 'pets', ['status'])

    op.create_table(
        'adoption_applications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('pet_id', sa.Integer(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_adoption_applications_user_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['pet_id'], ['pets.id'],
            name='fk_adoption_applications_pet_id',
            ondelete='CASCADE'
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name='ck_adoption_applications_status'
        ),
    )

    # Create indexes for performance
    op.create_index('ix_adoption_applications_user_id', 'adoption_applications', ['user_id'])
    op.create_index('ix_adoption_applications_pet_id', 'adoption_applications', ['pet_id'])
    op.create_index('ix_adoption_applications_status', 'adoption_applications', ['status'])
    op.create_index('ix_adoption_applications_created_at', 'adoption_applications', ['created_at'])


def downgrade() -> None:
    """Drop pet shop tables."""
    op.drop_index('ix_adoption_applications_created_at', 'adoption_applications')
    op.drop_index('ix_adoption_applications_status', 'adoption_applications')
    op.drop_index('ix_adoption_applications_pet_id', 'adoption_applications')
    op.drop_index('ix_adoption_applications_user_id', 'adoption_applications')
    op.drop_table('adoption_applications')
    op.drop_index('ix_pets_status', 'pets')
    op.drop_index('ix_pets_species', 'pets')
    op.drop_table('pets')
    op.drop_index('ix_users_email', 'users')
    op.drop_table('users')
