import pytest
from fastapi.testclient import TestClient

from pdv.main import app
from pdv.utils.prometheus_metrics import normalizar_rota
from pdv.database.db_connection import get_db
from pdv.api.catalogo.contracts.dependencies import get_produto_contract, get_usuario_contract
from tests.conftest import HOT_DOG, X_SALADA, REFRIGERANTE


@pytest.fixture
def client(session_factory, produto_contract, usuario_contract):
    def _get_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_produto_contract] = lambda: produto_contract
    app.dependency_overrides[get_usuario_contract] = lambda: usuario_contract
    yield TestClient(app)
    app.dependency_overrides.clear()


def _criar_venda(client, *itens, desconto=0):
    resp = client.post(
        "/api/vendas/admin/",
        json={
            "itens": [{"produto_id": p, "preco_unitario": preco, "quantidade": 1} for p, preco in itens],
            "desconto": desconto,
            "operador_id": 1,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_criar_e_buscar_venda(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"), (REFRIGERANTE, "5.00"))

    assert venda["status"] == "pendente"
    assert venda["total"] == 13.5
    assert [i["tipo_item"] for i in venda["itens"]] == ["COMIDA", "BEBIDA"]

    resp = client.get(f"/api/vendas/admin/{venda['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == venda["id"]


def test_venda_inexistente_responde_404_com_codigo(client):
    resp = client.get("/api/vendas/admin/999")
    assert resp.status_code == 404
    body = resp.json()
    assert body["code"] == "venda_nao_encontrada"
    assert body["context"] == {"venda_id": 999}


def test_requisicao_invalida_responde_422(client):
    resp = client.post("/api/vendas/admin/", json={"itens": "nada"})
    assert resp.status_code == 422
    assert resp.json()["code"] == "requisicao_invalida"


def test_desconto_e_status(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"), (X_SALADA, "12.00"))

    resp = client.put(f"/api/vendas/admin/{venda['id']}/desconto", json={"desconto": "0.50"})
    assert resp.status_code == 200
    assert resp.json() == {"venda_id": venda["id"], "total": 20.0}

    resp = client.put(f"/api/vendas/admin/{venda['id']}/status", json={"status": "parcialmente_paga"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "status_invalido"

    resp = client.put(f"/api/vendas/admin/{venda['id']}/status", json={"status": "cancelada"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelada"


def test_pagamento_por_item_e_estorno(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"), (X_SALADA, "12.00"))
    item1 = venda["itens"][0]["id"]

    resp = client.post(f"/api/pagamentos/admin/itens/{item1}", json={"metodo": "money", "valor": "8.50"})
    assert resp.status_code == 201, resp.text
    pago = resp.json()
    assert pago["status_venda"] == "parcialmente_paga"

    resp = client.post(f"/api/pagamentos/admin/itens/{item1}", json={"metodo": "money", "valor": "1.00"})
    assert resp.status_code == 422
    assert resp.json()["code"] == "pagamento_excedente"

    resp = client.post(
        f"/api/pagamentos/admin/registros/{pago['registro_id']}/estorno", json={"motivo": "erro"}
    )
    assert resp.status_code == 200
    assert resp.json()["status_pagamento"] == "pendente"
    assert resp.json()["status_venda"] == "pendente"

    resp = client.get(f"/api/pagamentos/admin/vendas/{venda['id']}/registros")
    assert resp.json() == []


def test_quitacao_com_metodos(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"), (X_SALADA, "12.00"))
    url = f"/api/pagamentos/admin/vendas/{venda['id']}/metodos"

    resp = client.post(url, json={"metodos": [{"metodo": "money", "valor": "10.00"}, {"metodo": "pix", "valor": "10.00"}]})
    assert resp.status_code == 422
    assert resp.json()["code"] == "soma_divergente"

    resp = client.post(url, json={"metodos": [{"metodo": "money", "valor": "10.00"}, {"metodo": "pix", "valor": "10.50"}]})
    assert resp.status_code == 201
    assert resp.json()["forma_pagamento"] == "pix"
    assert resp.json()["status_venda"] == "paga"


def test_fluxo_de_producao(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"), (REFRIGERANTE, "5.00"))
    lanche, bebida = (i["id"] for i in venda["itens"])

    resp = client.post(f"/api/producao/admin/itens/{lanche}/concluir")
    assert resp.status_code == 409
    assert resp.json()["code"] == "nao_em_producao"

    assert client.post(f"/api/producao/admin/itens/{lanche}/iniciar", json={"ator_id": 1}).status_code == 200
    assert client.post(f"/api/producao/admin/itens/{lanche}/concluir").json()["status_producao"] == "concluido"

    fila = client.get("/api/producao/admin/fila").json()
    assert [i["status_producao"] for i in fila[0]["itens"]] == ["concluido", "concluido"]

    assert client.post(f"/api/producao/admin/itens/{bebida}/entregar").json()["status_producao"] == "entregue"
    assert client.post(f"/api/producao/admin/itens/{lanche}/entregar").json()["status_producao"] == "entregue"
    assert client.get("/api/producao/admin/fila").json() == []

    resp = client.put(f"/api/producao/admin/itens/{lanche}/status", json={"novo_status": "concluido"})
    assert resp.status_code == 200
    assert resp.json()["entregue_em"] is None

    stats = client.get("/api/producao/admin/estatisticas").json()
    assert stats["total"] == 2


def test_fechamento_de_caixa(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"))
    client.post(f"/api/pagamentos/admin/itens/{venda['itens'][0]['id']}", json={"metodo": "money", "valor": "8.50"})

    resp = client.post(
        "/api/caixa/admin/fechamentos/",
        json={"operador_id": 1, "contado": {"money": "10.00", "pix": "0"}},
    )
    assert resp.status_code == 201, resp.text
    fechamento = resp.json()
    assert fechamento["vendido_money"] == 8.5
    assert fechamento["diferenca_money"] == 1.5
    assert fechamento["diferenca_total"] == 1.5

    assert client.get(f"/api/caixa/admin/fechamentos/{fechamento['id']}").status_code == 200
    assert len(client.get("/api/caixa/admin/fechamentos/").json()) == 1

    assert client.delete(f"/api/caixa/admin/fechamentos/{fechamento['id']}").status_code == 204
    assert client.get(f"/api/caixa/admin/fechamentos/{fechamento['id']}").status_code == 404
    assert client.get("/api/caixa/admin/fechamentos/").json() == []


def test_fechamento_operador_inexistente(client):
    resp = client.post("/api/caixa/admin/fechamentos/", json={"operador_id": 99, "contado": {"money": "1"}})
    assert resp.status_code == 404
    assert resp.json()["code"] == "operador_nao_encontrado"


def test_metrics(client):
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text


def test_normalizar_rota_das_metricas():
    assert normalizar_rota("/api/vendas/admin/123/status") == "/api/vendas/admin/{id}/status"
    assert normalizar_rota("/api/caixa/admin/fechamentos/data/2026-10-19") == "/api/caixa/admin/fechamentos/data/{data}"


def test_consultas_de_vendas(client):
    venda = _criar_venda(client, (HOT_DOG, "8.50"))
    client.post(
        f"/api/pagamentos/admin/vendas/{venda['id']}/metodos",
        json={"metodos": [{"metodo": "pix", "valor": "8.50"}]},
    )

    por_operador = client.get("/api/vendas/admin/operador/1").json()
    assert [v["id"] for v in por_operador] == [venda["id"]]

    por_pix = client.get("/api/vendas/admin/forma-pagamento/pix").json()
    assert por_pix["quantidade"] == 1
    assert por_pix["total"] == 8.5

    ranking = client.get("/api/vendas/admin/produtos-mais-vendidos", params={"limit": 5}).json()
    assert ranking == [{"produto_id": HOT_DOG, "produto_nome": "Hot Dog Completo", "quantidade": 1, "receita": 8.5}]
