"""Alembic 마이그레이션: SearchCache 테이블 추가"""
from alembic import op
import sqlalchemy as sa

revision = "0001_search_cache"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """검색 캐시 테이블 생성"""
    op.create_table(
        'search_cache',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('query', sa.String(500), nullable=False),
        sa.Column('results_json', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    
    # 인덱스 추가
    op.create_index('ix_search_cache_id', 'search_cache', ['id'])
    op.create_index('ix_search_cache_query', 'search_cache', ['query'], unique=True)
    op.create_index('ix_search_cache_expires_at', 'search_cache', ['expires_at'])


def downgrade():
    """테이블 삭제"""
    op.drop_index('ix_search_cache_expires_at', table_name='search_cache')
    op.drop_index('ix_search_cache_query', table_name='search_cache')
    op.drop_index('ix_search_cache_id', table_name='search_cache')
    op.drop_table('search_cache')
