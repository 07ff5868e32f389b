# -*- coding: utf-8 -*-
import pandas as pd
import pytest

import config_conexao as cfg
import conexao_api as api
import dados_exemplo
from conftest import RespostaFalsa


# ==============================================================================
# REQUISIÇÃO SEGURA
# ==============================================================================

def test_requisicao_com_sucesso(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, {'vendas': []})
    assert api.realizar_requisicao_segura(cfg.VENDAS_ENDPOINT, params={'limite': 0}) == {'vendas': []}
    chamada = api_falsa.chamadas[0]
    assert chamada['params'] == {'limite': 0}
    assert chamada['timeout'] == cfg.TIMEOUT_REQUISICAO_S
    assert 'Authorization' not in chamada['headers']


def test_token_enviado_como_bearer(api_falsa, monkeypatch):
    monkeypatch.setattr(cfg, 'API_AUTH_TOKEN', 'segredo')
    api_falsa.responder(cfg.CLIENTES_ENDPOINT, [])
    api.realizar_requisicao_segura(cfg.CLIENTES_ENDPOINT)
    assert api_falsa.chamadas[0]['headers']['Authorization'] == 'Bearer segredo'


def test_sem_resposta_tenta_novamente_e_falha_com_502(api_falsa):
    with pytest.raises(api.ErroAPI) as erro:
        api.realizar_requisicao_segura(cfg.VENDAS_ENDPOINT)
    assert erro.value.status == 502
    assert 'Sem resposta' in erro.value.detalhes
    assert len(api_falsa.chamadas) == cfg.MAX_RETENTATIVAS + 1


def test_erro_http_preserva_status_e_corpo(api_falsa):
    api_falsa.responder(cfg.ESTOQUE_ENDPOINT, status_code=404, text='{"detail": "Not Found"}')
    with pytest.raises(api.ErroAPI) as erro:
        api.realizar_requisicao_segura(cfg.ESTOQUE_ENDPOINT, retentativas=0)
    assert erro.value.status == 404
    assert erro.value.detalhes == '{"detail": "Not Found"}'
    assert str(erro.value) == 'API request failed: 404'
    assert len(api_falsa.chamadas) == 1


def test_recupera_na_segunda_tentativa(api_falsa):
    respostas = iter([RespostaFalsa(status_code=500, text='erro'), RespostaFalsa([{'PEDIDO': '1'}])])
    api_falsa.responder_com(cfg.VENDAS_ENDPOINT, lambda params: next(respostas))
    assert api.realizar_requisicao_segura(cfg.VENDAS_ENDPOINT) == [{'PEDIDO': '1'}]
    assert len(api_falsa.chamadas) == 2


# ==============================================================================
# PARÂMETROS
# ==============================================================================

def test_parametros_vendas():
    assert api.montar_parametros_vendas() == {'page': 1, 'limit': 100}
    assert api.montar_parametros_vendas({'limite': 0, 'page': 3, 'limit': 20}) == {'limite': 0}
    assert api.montar_parametros_vendas({'limit': 0}) == {'limite': 0}
    assert api.montar_parametros_vendas({
        'page': 2, 'limit': 50, 'data_inicio': '2025-01-01', 'data_fim': '2025-01-31',
        'status_pedido': ['OK', 'PENDENTE'],
    }) == {
        'page': 2, 'limit': 50, 'data_inicio': '2025-01-01', 'data_fim': '2025-01-31', 'status_pedido': 'OK,PENDENTE',
    }


def test_parametros_estoque():
    assert api.montar_parametros_estoque() == {'page': 1, 'limit': 10}
    assert api.montar_parametros_estoque({'limite': 0, 'estoque_min': 0, 'nome_produto': ''}) == {
        'limite': 0, 'estoque_min': 0,
    }
    assert api.montar_parametros_estoque({'codigo_produto': 'P1', 'estoque_max': 5}) == {
        'page': 1, 'limit': 10, 'codigo_produto': 'P1', 'estoque_max': 5,
    }


# ==============================================================================
# BUSCAS COM DADOS DE EXEMPLO COMO RESERVA
# ==============================================================================

def test_buscar_vendas_pede_todos_os_registros(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, {'vendas': [{'PEDIDO': 7, 'TOTAL_PEDIDO': '10.5', 'STATUS_PEDIDO': 'OK'}]})
    vendas = api.buscar_vendas({'data_inicio': '2025-01-01'})
    assert list(vendas['pedido']) == ['7']
    assert vendas.loc[0, 'total_pedido'] == 10.5
    assert api_falsa.chamadas[0]['params'] == {'limite': 0, 'data_inicio': '2025-01-01'}


def test_buscar_vendas_usa_exemplo_quando_api_falha():
    vendas = api.buscar_vendas()
    assert len(vendas) == len(dados_exemplo.VENDAS_EXEMPLO)
    assert vendas.loc[0, 'pedido'] == '1001'


def test_buscar_vendas_usa_exemplo_quando_api_nao_retorna_nada(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, {'vendas': [], 'total': 0})
    assert len(api.buscar_vendas()) == len(dados_exemplo.VENDAS_EXEMPLO)


def test_buscar_clientes_usa_exemplo_com_json_invalido(api_falsa):
    api_falsa.responder(cfg.CLIENTES_ENDPOINT, ValueError('JSON inválido'))
    clientes = api.buscar_clientes()
    assert len(clientes) == len(dados_exemplo.CLIENTES_EXEMPLO)


def test_respostas_ficam_em_cache(api_falsa):
    api_falsa.responder(cfg.CLIENTES_ENDPOINT, [{'CODIGO_CLIENTE': 1, 'NOME_CLIENTE': 'Ana'}])
    api.buscar_clientes()
    api.buscar_clientes()
    assert len(api_falsa.chamadas) == 1

    api.limpar_cache()
    api.buscar_clientes()
    assert len(api_falsa.chamadas) == 2


def test_cache_expira(api_falsa, monkeypatch):
    monkeypatch.setattr(cfg, 'CACHE_DURATION_MINUTES', 0)
    api_falsa.responder(cfg.CLIENTES_ENDPOINT, [{'CODIGO_CLIENTE': 1}])
    api.buscar_clientes()
    api.buscar_clientes()
    assert len(api_falsa.chamadas) == 2


def test_cache_descarta_respostas_vencidas(api_falsa, monkeypatch):
    monkeypatch.setattr(cfg, 'CACHE_DURATION_MINUTES', 0)
    api_falsa.responder(cfg.VENDAS_ENDPOINT, [{'PEDIDO': '1'}])
    for dia in range(1, 6):
        api.buscar_vendas({'data_inicio': f"2025-01-0{dia}"})
    assert len(api_falsa.chamadas) == 5
    assert len(api._cache) == 1


def test_cache_mantem_respostas_validas(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, [{'PEDIDO': '1'}])
    api.buscar_vendas({'data_inicio': '2025-01-01'})
    api.buscar_vendas({'data_inicio': '2025-01-02'})
    assert len(api._cache) == 2


def test_buscar_estoque_com_total_da_api(api_falsa):
    api_falsa.responder(cfg.ESTOQUE_ENDPOINT, {'estoque': [{'CODIGO_PRO': 'P1', 'QUANTIDADE': 3}], 'total': 25})
    resultado = api.buscar_estoque({'page': 2, 'limit': 10})
    assert resultado['total'] == 25
    assert resultado['hasMore'] is True
    assert resultado['estoque'].loc[0, 'quantidade'] == 3


def test_buscar_estoque_conta_itens_quando_api_nao_informa_total(api_falsa):
    def responder(params):
        if params.get('limite') == 0:
            return RespostaFalsa([{'CODIGO_PRO': str(i)} for i in range(12)])
        return RespostaFalsa([{'CODIGO_PRO': str(i)} for i in range(10)])

    api_falsa.responder_com(cfg.ESTOQUE_ENDPOINT, responder)
    resultado = api.buscar_estoque()
    assert resultado['total'] == 12
    assert resultado['hasMore'] is True
    assert len(api_falsa.chamadas) == 2


def test_buscar_estoque_sempre_conta_itens_em_consulta_paginada(api_falsa):
    def responder(params):
        if params.get('limite') == 0:
            return RespostaFalsa({'estoque': [{'CODIGO_PRO': str(i)} for i in range(25)]})
        return RespostaFalsa({'estoque': [{'CODIGO_PRO': str(i)} for i in range(10)], 'total': 10})

    api_falsa.responder_com(cfg.ESTOQUE_ENDPOINT, responder)
    resultado = api.buscar_estoque({'page': 1, 'limit': 10})
    assert resultado['total'] == 25
    assert resultado['hasMore'] is True
    assert len(resultado['estoque']) == 10
    assert api_falsa.chamadas[1]['params'] == {'limite': 0}


def test_buscar_estoque_usa_total_da_resposta_se_contagem_falhar(api_falsa):
    def responder(params):
        if params.get('limite') == 0:
            return RespostaFalsa(status_code=500, text='Erro interno')
        return RespostaFalsa({'estoque': [{'CODIGO_PRO': str(i)} for i in range(10)], 'total': 40})

    api_falsa.responder_com(cfg.ESTOQUE_ENDPOINT, responder)
    resultado = api.buscar_estoque({'page': 3, 'limit': 10})
    assert resultado['total'] == 40
    assert resultado['hasMore'] is True


def test_buscar_estoque_falha_retorna_vazio():
    resultado = api.buscar_estoque()
    assert resultado['estoque'].empty
    assert resultado['total'] == 0
    assert resultado['hasMore'] is False


def test_buscar_estoque_com_valores(api_falsa):
    api_falsa.responder(cfg.ESTOQUE_ENDPOINT, {'estoque': [
        {'CODIGO_PRO': 'P1', 'VALOR_UNITARIO': 9},
        {'CODIGO_PRO': 'P2', 'VALOR_UNITARIO': 4},
    ], 'total': 2})
    api_falsa.responder(cfg.VENDAS_ENDPOINT, {'vendas': [
        {'PEDIDO': '1', 'CODIGO_PRO': 'P1', 'VALOR_UNITARIO': 11, 'DATA_VENDA': '18/01/2025'},
    ]})

    resultado = api.buscar_estoque_com_valores({'limite': 0}, hoje=pd.Timestamp(2025, 1, 20))

    estoque = resultado['estoque']
    assert list(estoque['valor_unitario']) == [11.0, 4.0]
    assert list(estoque['valor_origem']) == ['vendas', 'estoque']
    params_vendas = api_falsa.chamadas_para(cfg.VENDAS_ENDPOINT)[0]['params']
    assert params_vendas == {'limite': 0, 'data_inicio': '2024-12-21', 'data_fim': '2025-01-20'}


def test_buscar_estoque_com_valores_mantem_estoque_sem_vendas(api_falsa):
    api_falsa.responder(cfg.ESTOQUE_ENDPOINT, {'estoque': [{'CODIGO_PRO': 'P1', 'VALOR_UNITARIO': 9}], 'total': 1})
    resultado = api.buscar_estoque_com_valores({'limite': 0}, hoje=pd.Timestamp(2025, 1, 20))
    assert list(resultado['estoque']['valor_origem']) == ['estoque']
    assert resultado['estoque'].loc[0, 'valor_unitario'] == 9


def test_listar_status_vendas_com_exemplo():
    assert api.listar_status_vendas() == ['CANCELADO', 'OK', 'PENDENTE']


# ==============================================================================
# REPASSE (PROXY)
# ==============================================================================

def test_proxy_vendas_has_more_pelo_tamanho_da_pagina(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, {'vendas': [{'PEDIDO': '1'}, {'PEDIDO': '2'}], 'total': 2})
    corpo, status = api.consultar_proxy('vendas', {'page': 1, 'limit': 2})
    assert status == 200
    assert corpo == {'vendas': [{'PEDIDO': '1'}, {'PEDIDO': '2'}], 'total': 2, 'page': 1, 'limit': 2, 'hasMore': True}


def test_proxy_modo_todos_nunca_tem_mais(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, [{'PEDIDO': '1'}])
    corpo, _ = api.consultar_proxy('vendas', {'limite': 0, 'limit': 1})
    assert corpo['hasMore'] is False
    assert api_falsa.chamadas[0]['params'] == {'limite': 0}


def test_proxy_nao_usa_cache_nem_retentativas(api_falsa):
    api_falsa.responder(cfg.CLIENTES_ENDPOINT, [{'CODIGO_CLIENTE': 1}])
    api.consultar_proxy('clientes', {'page': None})
    corpo, status = api.consultar_proxy('clientes')
    assert (corpo, status) == ({'clientes': [{'CODIGO_CLIENTE': 1}], 'total': 1}, 200)
    assert len(api_falsa.chamadas) == 2
    assert api_falsa.chamadas[0]['params'] == {}


def test_proxy_erro_preserva_status(api_falsa):
    api_falsa.responder(cfg.VENDAS_ENDPOINT, status_code=503, text='manutenção')
    corpo, status = api.consultar_proxy('vendas')
    assert status == 503
    assert corpo == {'error': 'API request failed: 503', 'details': 'manutenção'}
    assert len(api_falsa.chamadas) == 1


def test_proxy_estoque_erro_traz_lista_vazia():
    corpo, status = api.consultar_proxy('estoque')
    assert status == 502
    assert corpo['estoque'] == []
    assert corpo['total'] == 0
    assert corpo['error'] == 'API request failed: 502'


def test_proxy_recurso_desconhecido():
    with pytest.raises(ValueError):
        api.consultar_proxy('fornecedores')
