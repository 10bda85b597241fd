"""Identity schema: usuarios, empresa, empleados

Revision ID: 0001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Credentials, one per identity key
    op.create_table(
        'usuarios',
        sa.Column('rif_cedula', sa.String(20), primary_key=True),
        sa.Column('usuario', sa.String(120), nullable=False),
        sa.Column('contrasena', sa.String(255), nullable=False),
        sa.Column('tipo', sa.String(20), nullable=False),
        sa.Column('estado', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_usuarios_usuario', 'usuarios', ['usuario'], unique=True)

    # Companies
    op.create_table(
        'empresa',
        sa.Column('rif', sa.String(20), primary_key=True),
        sa.Column('nombre', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('direccion', sa.String(500), nullable=True),
        sa.Column('estado', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # Employees
    op.create_table(
        'empleados',
        sa.Column('cedula', sa.String(20), primary_key=True),
        sa.Column('nombres', sa.String(255), nullable=False),
        sa.Column('apellidos', sa.String(255), nullable=False),
        sa.Column('rif_empresa', sa.String(20), sa.ForeignKey('empresa.rif'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('cargo', sa.String(120), nullable=False),
        sa.Column('numero_tlf', sa.String(30), nullable=False),
        sa.Column('estado', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_empleados_rif_empresa', 'empleados', ['rif_empresa'])


def downgrade() -> None:
    op.drop_index('ix_empleados_rif_empresa', table_name='empleados')
    op.drop_table('empleados')
    op.drop_table('empresa')
    op.drop_index('ix_usuarios_usuario', table_name='usuarios')
    op.drop_table('usuarios')
