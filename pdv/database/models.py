"""
Importa todos os models para registrá-los no metadata do SQLAlchemy.

Os relacionamentos são declarados por nome (string); todos os models
precisam estar importados antes da primeira query.
"""
from pdv.api.catalogo.models import CategoriaModel, ProdutoModel, UsuarioModel  # noqa: F401
from pdv.api.vendas.models import VendaModel, VendaItemModel  # noqa: F401
from pdv.api.pagamentos.models import PagamentoMetodoModel  # noqa: F401
from pdv.api.producao.models import ProducaoItemModel  # noqa: F401
from pdv.api.caixas.models import FechamentoCaixaModel  # noqa: F401
