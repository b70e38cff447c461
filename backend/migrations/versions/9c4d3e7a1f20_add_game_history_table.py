"""add game table recording every accepted score

Revision ID: 9c4d3e7a1f20
Revises: 5b7e21c9d0aa
Create Date: 2025-09-21 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '9c4d3e7a1f20'
down_revision = '5b7e21c9d0aa'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'game' in set(insp.get_table_names()):
        return

    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('played_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['player_id'], ['player.id'], name='fk_game_player_id'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('game') as batch_op:
        batch_op.create_index('ix_game_player_id', ['player_id'], unique=False)


def downgrade():
    with op.batch_alter_table('game') as batch_op:
        batch_op.drop_index('ix_game_player_id')
    op.drop_table('game')
