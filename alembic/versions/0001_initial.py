"""
create profiles, resources, notes and assignments tables

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

profile_role = sa.Enum('mentee', 'mentor', 'moderator', 'admin', 'super_admin', name='profilerole')


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('profile_id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('role', profile_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('pending', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_profiles_profile_id', 'profiles', ['profile_id'])
    op.create_index('ix_profiles_email', 'profiles', ['email'], unique=True)

    op.create_table(
        'resources',
        sa.Column('resource_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('resource_name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('condition', sa.String(), nullable=False),
        sa.Column('assigned', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('current_assignee', sa.String(), sa.ForeignKey('profiles.profile_id'), nullable=True),
        sa.Column('previous_assignee', sa.String(), sa.ForeignKey('profiles.profile_id'), nullable=True),
        sa.Column('monetary_value', sa.String(), nullable=True),
        sa.Column('deductible_donation', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_resources_category', 'resources', ['category'])
    op.create_index('ix_resources_current_assignee', 'resources', ['current_assignee'])

    op.create_table(
        'notes',
        sa.Column('note_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('content_type', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('level', sa.String(), nullable=True),
        sa.Column('visible_to_admin', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('visible_to_moderator', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('visible_to_mentor', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('profile_id_mentor', sa.String(), sa.ForeignKey('profiles.profile_id'), nullable=True),
        sa.Column('profile_id_mentee', sa.String(), sa.ForeignKey('profiles.profile_id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_notes_profile_id_mentor', 'notes', ['profile_id_mentor'])
    op.create_index('ix_notes_profile_id_mentee', 'notes', ['profile_id_mentee'])

    op.create_table(
        'assignments',
        sa.Column('assignment_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('mentor_id', sa.String(), sa.ForeignKey('profiles.profile_id'), nullable=False),
        sa.Column('mentee_id', sa.String(), sa.ForeignKey('profiles.profile_id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.UniqueConstraint('mentor_id', 'mentee_id', name='uq_assignment_pair'),
    )
    op.create_index('ix_assignments_mentor_id', 'assignments', ['mentor_id'])
    op.create_index('ix_assignments_mentee_id', 'assignments', ['mentee_id'])


def downgrade() -> None:
    op.drop_index('ix_assignments_mentee_id', table_name='assignments')
    op.drop_index('ix_assignments_mentor_id', table_name='assignments')
    op.drop_table('assignments')
    op.drop_index('ix_notes_profile_id_mentee', table_name='notes')
    op.drop_index('ix_notes_profile_id_mentor', table_name='notes')
    op.drop_table('notes')
    op.drop_index('ix_resources_current_assignee', table_name='resources')
    op.drop_index('ix_resources_category', table_name='resources')
    op.drop_table('resources')
    op.drop_index('ix_profiles_email', table_name='profiles')
    op.drop_index('ix_profiles_profile_id', table_name='profiles')
    op.drop_table('profiles')
    profile_role.drop(op.get_bind(), checkfirst=True)
