import os

# Precisa estar definido antes de importar pdv (o engine é criado no import)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUNNING_IN_DOCKER", "1")

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest
from sqlalchemy.orm import sessionmaker

from pdv.api.catalogo.contracts.produto_contract import IProdutoContract, ProdutoDTO, CategoriaDTO
from pdv.api.catalogo.contracts.usuario_contract import IUsuarioContract, UsuarioDTO
from pdv.api.vendas.schemas.schema_venda import VendaCreate, VendaItemCreate
from pdv.api.vendas.services.service_venda import VendaService
from pdv.database.db_connection import Base, criar_engine
from pdv.database import models  # noqa: F401

LANCHES = 1
BEBIDAS = 2

HOT_DOG = 10
X_SALADA = 11
REFRIGERANTE = 20
SUCO = 21


class FakeProdutoContract(IProdutoContract):
    """Catálogo em memória: lanches (comida) e bebidas."""

    def __init__(self):
        self.categorias = {
            LANCHES: CategoriaDTO(id=LANCHES, nome="Lanches"),
            BEBIDAS: CategoriaDTO(id=BEBIDAS, nome="Bebidas"),
        }
        self.produtos = {
            HOT_DOG: ProdutoDTO(id=HOT_DOG, nome="Hot Dog Completo", categoria_id=LANCHES),
            X_SALADA: ProdutoDTO(id=X_SALADA, nome="X-Salada", categoria_id=LANCHES),
            REFRIGERANTE: ProdutoDTO(id=REFRIGERANTE, nome="Refrigerante Lata", categoria_id=BEBIDAS),
            SUCO: ProdutoDTO(id=SUCO, nome="Suco de Laranja", categoria_id=LANCHES),
        }

    def obter_produto(self, produto_id: int) -> Optional[ProdutoDTO]:
        return self.produtos.get(produto_id)

    def obter_categoria(self, categoria_id: int) -> Optional[CategoriaDTO]:
        return self.categorias.get(categoria_id)


class FakeUsuarioContract(IUsuarioContract):
    def __init__(self):
        self.usuarios = {1: UsuarioDTO(id=1, nome="Operador Caixa")}

    def obter_usuario(self, usuario_id: int) -> Optional[UsuarioDTO]:
        return self.usuarios.get(usuario_id)


class RelogioFixo:
    """Relógio controlável: devolve sempre `agora`, que o teste pode avançar."""

    def __init__(self, agora: datetime):
        self.agora = agora

    def __call__(self) -> datetime:
        return self.agora


@pytest.fixture
def engine():
    engine = criar_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def relogio():
    return RelogioFixo(datetime(2026, 10, 19, 12, 0, 0))


@pytest.fixture
def produto_contract():
    return FakeProdutoContract()


@pytest.fixture
def usuario_contract():
    return FakeUsuarioContract()


@pytest.fixture
def venda_service(db, produto_contract, relogio):
    return VendaService(db, produto_contract, relogio=relogio)


@pytest.fixture
def criar_venda(venda_service):
    """Cria uma venda a partir de pares (produto_id, preco_unitario[, quantidade])."""

    def _criar(*itens, desconto="0", operador_id=1):
        return venda_service.criar(
            VendaCreate(
                itens=[
                    VendaItemCreate(
                        produto_id=item[0],
                        preco_unitario=Decimal(item[1]),
                        quantidade=item[2] if len(item) > 2 else 1,
                    )
                    for item in itens
                ],
                desconto=Decimal(desconto),
                operador_id=operador_id,
            )
        )

    return _criar
