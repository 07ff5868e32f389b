# -*- coding: utf-8 -*-
import pytest
import requests

import config_conexao as cfg
import conexao_api
import normalizacao as norm


# ==============================================================================
# RESPOSTAS FALSAS DA API
# ==============================================================================

class RespostaFalsa:
    """Imita o necessário de requests.Response."""

    def __init__(self, payload=None, status_code=200, text=''):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class ApiFalsa:
    """Substitui requests.get, respondendo por URL e registrando cada chamada."""

    def __init__(self):
        self.chamadas = []
        self.respostas = {}

    def responder(self, url, payload=None, status_code=200, text=''):
        self.respostas[url] = RespostaFalsa(payload, status_code, text)

    def responder_com(self, url, funcao):
        """`funcao(params)` devolve a RespostaFalsa de cada chamada."""
        self.respostas[url] = funcao

    def chamadas_para(self, url):
        return [chamada for chamada in self.chamadas if chamada['url'] == url]

    def __call__(self, url, params=None, headers=None, timeout=None):
        self.chamadas.append({'url': url, 'params': dict(params or {}), 'headers': headers, 'timeout': timeout})
        resposta = self.respostas.get(url)
        if resposta is None:
            raise requests.exceptions.ConnectionError(f"Sem resposta para {url}")
        if callable(resposta):
            return resposta(params or {})
        return resposta


def _sem_rede(url, params=None, headers=None, timeout=None):
    raise requests.exceptions.ConnectionError(f"Rede desabilitada nos testes: {url}")


@pytest.fixture(autouse=True)
def ambiente_isolado(monkeypatch):
    """Cache limpo, sem pausa entre tentativas e sem acesso à rede."""
    conexao_api.limpar_cache()
    monkeypatch.setattr(cfg, 'INTERVALO_RETENTATIVAS_S', 0)
    monkeypatch.setattr(cfg, 'API_AUTH_TOKEN', None)
    monkeypatch.setattr(requests, 'get', _sem_rede)
    yield
    conexao_api.limpar_cache()


@pytest.fixture
def api_falsa(monkeypatch):
    falsa = ApiFalsa()
    monkeypatch.setattr(requests, 'get', falsa)
    return falsa


# ==============================================================================
# DADOS DE TESTE
# ==============================================================================

VENDAS_BRUTAS = [
    {"PEDIDO": "A1", "CODIGO_EXP": 1, "CLIENTE_DOC": "111.111.111-11", "CLIENTE_NOME": "Ana", "VENDEDOR_NOME": "Bruno",
     "CODIGO_PRO": "P1", "NOME_PRODUTO": "Luva", "PRODUTO_MARCA": "Marca X", "VALOR_UNITARIO": 10,
     "TOTAL_PEDIDO": 100, "DATA_VENDA": "15/12/2024", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "A1", "CODIGO_EXP": 1, "CLIENTE_DOC": "111.111.111-11", "CLIENTE_NOME": "Ana", "VENDEDOR_NOME": "Bruno",
     "CODIGO_PRO": "P2", "NOME_PRODUTO": "Gaze", "PRODUTO_MARCA": "Marca Y", "VALOR_UNITARIO": 5,
     "TOTAL_PEDIDO": 100, "DATA_VENDA": "15/12/2024", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "A2", "CODIGO_EXP": 1, "CLIENTE_DOC": "11111111111", "CLIENTE_NOME": "Ana", "VENDEDOR_NOME": "Carla",
     "CODIGO_PRO": "P1", "NOME_PRODUTO": "Luva", "PRODUTO_MARCA": "Marca X", "VALOR_UNITARIO": 12,
     "TOTAL_PEDIDO": 300, "DATA_VENDA": "10/01/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "A3", "CODIGO_EXP": 2, "CLIENTE_DOC": "22.222.222/0001-22", "CLIENTE_NOME": "Hospital B", "VENDEDOR_NOME": "Bruno",
     "CODIGO_PRO": "P3", "NOME_PRODUTO": "Seringa", "PRODUTO_MARCA": None, "VALOR_UNITARIO": 0,
     "TOTAL_PEDIDO": 200, "DATA_VENDA": "2025-01-20", "STATUS_PEDIDO": "PENDENTE"},
    {"PEDIDO": "A4", "CODIGO_EXP": 9, "CLIENTE_DOC": None, "CLIENTE_NOME": "Sem Doc", "VENDEDOR_NOME": "Carla",
     "CODIGO_PRO": "P1", "NOME_PRODUTO": "Luva", "PRODUTO_MARCA": "Marca X", "VALOR_UNITARIO": 11,
     "DATA_VENDA": "data inválida", "STATUS_PEDIDO": "OK"},
]

CLIENTES_BRUTOS = [
    {"CODIGO_CLIENTE": 1, "NOME_CLIENTE": "Ana", "CPF_CNPJ": "111.111.111-11", "EMAIL": "ana@email.com",
     "UF": "SP", "CIDADE": "São Paulo", "NOME_GRUPO": "Profissionais", "ULTIMA_COMPRA": "10/01/2025"},
    {"CODIGO_CLIENTE": 2, "NOME_CLIENTE": "Hospital B", "CPF_CNPJ": "22222222000122", "UF": "RJ",
     "CIDADE": "Rio de Janeiro", "NOME_GRUPO": "Hospitais", "ULTIMA_COMPRA": "2024-06-02"},
    {"CODIGO_CLIENTE": 3, "NOME_CLIENTE": "Clínica C", "CPF_CNPJ": "33.333.333/0001-33", "UF": "SP",
     "NOME_GRUPO": "Clínicas", "ULTIMA_COMPRA": None},
    {"CODIGO_CLIENTE": 4, "NOME_CLIENTE": "Sem UF", "CPF_CNPJ": None, "UF": None},
]


@pytest.fixture
def vendas():
    return norm.normalizar_vendas(VENDAS_BRUTAS)


@pytest.fixture
def clientes():
    return norm.normalizar_clientes(CLIENTES_BRUTOS)
