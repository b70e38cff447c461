"""create player table with weekly score ledger fields

Revision ID: 5b7e21c9d0aa
Revises:
Create Date: 2025-09-14 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b7e21c9d0aa'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'player' in set(insp.get_table_names()):
        return

    op.create_table(
        'player',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('twitter_id', sa.String(length=64), nullable=True),
        sa.Column('display_name', sa.String(length=128), nullable=False, server_default=''),
        sa.Column('photo', sa.String(length=512), nullable=True),
        sa.Column('password_hash', sa.String(length=256), nullable=True),
        sa.Column('total_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('weekly_scores', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('player') as batch_op:
        batch_op.create_index('ix_player_email', ['email'], unique=True)
        batch_op.create_index('ix_player_twitter_id', ['twitter_id'], unique=True)
        batch_op.create_index('ix_player_total_score', ['total_score'], unique=False)


def downgrade():
    with op.batch_alter_table('player') as batch_op:
        batch_op.drop_index('ix_player_total_score')
        batch_op.drop_index('ix_player_twitter_id')
        batch_op.drop_index('ix_player_email')
    op.drop_table('player')
