"""Create extracted_recipes

Revision ID: c3d4e5f6a7b8
Revises:
Create Date: 2026-10-18 12:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = 'c3d4e5f6a7b8'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'extracted_recipes',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('recipe_data', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('is_url', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_recipe', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_social', sa.Boolean(), nullable=True),
        sa.Column('provider', sa.String(), nullable=True),
        sa.Column('original_url', sa.String(), nullable=True),
        sa.Column('recipe_name', sa.String(), nullable=True),
        sa.Column('time_minutes', sa.Integer(), nullable=True),
        sa.Column('serves_people', sa.Integer(), nullable=True),
        sa.Column('makes_items', sa.String(), nullable=True),
        sa.Column('language_code', sa.String(), nullable=True),
        sa.Column('units', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_extracted_recipes_user_id', 'extracted_recipes', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_extracted_recipes_user_id', table_name='extracted_recipes')
    op.drop_table('extracted_recipes')
