# -*- coding: utf-8 -*-

# ==============================================================================
# MÓDULO DE NORMALIZAÇÃO DOS DADOS DA API
# ==============================================================================
# A API devolve o mesmo dado com nomes de campo diferentes conforme a origem
# (ex: 'TOTAL_PEDIDO', 'valor' ou 'total' para o valor do pedido). Este módulo
# define um esquema explícito para cada tipo de registro (venda, cliente e
# item de estoque) e converte os registros brutos em DataFrames com colunas
# fixas. Todo o restante da aplicação lê apenas as colunas canônicas.
# ==============================================================================


# ==============================================================================
# IMPORTAÇÃO DE BIBLIOTECAS
# ==============================================================================
import math
import re
from datetime import datetime

import pandas as pd


# ==============================================================================
# ESQUEMAS: COLUNA CANÔNICA -> CAMPOS ACEITOS NA RESPOSTA DA API
# ==============================================================================
# A ordem dos campos define a prioridade: vale o primeiro que estiver preenchido.

ESQUEMA_VENDA = {
    'pedido': ('PEDIDO', 'id'),
    'cliente_id': ('CODIGO_EXP', 'cliente_id', 'customer_id'),
    'cliente_doc': ('CLIENTE_DOC',),
    'cliente_nome': ('CLIENTE_NOME',),
    'vendedor': ('VENDEDOR_NOME',),
    'produto_codigo': ('CODIGO_PRO',),
    'produto': ('NOME_PRODUTO', 'PRODUTO', 'produto'),
    'categoria': ('PRODUTO_MARCA', 'categoria', 'category'),
    'valor_unitario': ('VALOR_UNITARIO',),
    'total_pedido': ('TOTAL_PEDIDO', 'valor', 'total', 'price'),
    'data': ('DATA_VENDA', 'ORDEM_DATA_PEDIDO', 'DATA_PEDIDO', 'data', 'date', 'created_at'),
    'status': ('STATUS_PEDIDO', 'status'),
}

ESQUEMA_CLIENTE = {
    'id': ('CODIGO_CLIENTE', 'id'),
    'doc': ('CPF_CNPJ',),
    'nome': ('NOME_CLIENTE', 'NOME', 'nome', 'name'),
    'email': ('EMAIL', 'email'),
    'telefone': ('CELULAR', 'TELEFONE', 'telefone'),
    'uf': ('UF',),
    'cidade': ('CIDADE',),
    'grupo': ('NOME_GRUPO',),
    'ultima_compra': ('ULTIMA_COMPRA',),
}

ESQUEMA_ESTOQUE = {
    'codigo': ('CODIGO_PRO', 'CODIGO_PRODUTO'),
    'nome': ('NOME_PRODUTO',),
    'quantidade': ('QUANTIDADE', 'ESTOQUE_ATUAL'),
    'estoque_minimo': ('ESTOQUE_MINIMO',),
    'estoque_maximo': ('ESTOQUE_MAXIMO',),
    'valor_unitario': ('VALOR_UNITARIO',),
    'categoria': ('CATEGORIA',),
    'marca': ('MARCA',),
    'fornecedor': ('FORNECEDOR',),
    'localizacao': ('LOCALIZACAO',),
}

COLUNAS_VENDA = list(ESQUEMA_VENDA)
COLUNAS_CLIENTE = list(ESQUEMA_CLIENTE)
COLUNAS_ESTOQUE = list(ESQUEMA_ESTOQUE)


# ==============================================================================
# FUNÇÕES AUXILIARES
# ==============================================================================

def valor_preenchido(valor) -> bool:
    """Indica se um valor bruto da API conta como preenchido (None, NaN e '' não contam)."""
    if valor is None:
        return False
    if isinstance(valor, str):
        return valor.strip() != ''
    if isinstance(valor, float) and math.isnan(valor):
        return False
    return True


def _primeiro_valor(registro: dict, campos: tuple):
    for campo in campos:
        valor = registro.get(campo)
        if valor_preenchido(valor):
            return valor
    return None


def _aplicar_esquema(registros, esquema: dict) -> pd.DataFrame:
    """
    Monta um DataFrame com exatamente as colunas do esquema, lendo cada coluna
    do primeiro campo preenchido do registro bruto.

    Args:
        registros (list): Lista de dicionários vindos da API.
        esquema (dict): Mapeamento coluna canônica -> campos aceitos.

    Returns:
        pd.DataFrame: DataFrame com as colunas do esquema (vazio se não houver registros).
    """
    linhas = [
        {coluna: _primeiro_valor(registro, campos) for coluna, campos in esquema.items()}
        for registro in (registros or [])
        if isinstance(registro, dict)
    ]
    return pd.DataFrame(linhas, columns=list(esquema), dtype=object)


def _como_texto(serie: pd.Series) -> pd.Series:
    """Converte uma coluna de identificadores para texto, preservando os vazios como None."""
    return serie.map(lambda x: str(x).strip() if valor_preenchido(x) else None).astype(object)


def normalizar_documento(doc):
    """
    Remove todos os caracteres não numéricos de um CPF/CNPJ.
    '123.456.789-00' e '12345678900' resultam na mesma chave.

    Returns:
        str or None: Apenas os dígitos, ou None se não sobrar nenhum.
    """
    if not valor_preenchido(doc):
        return None
    digitos = re.sub(r'\D', '', str(doc))
    return digitos or None


def converter_data(valor):
    """
    Converte datas nos formatos 'DD/MM/AAAA' (com ou sem hora) e ISO em Timestamp.
    Valores que não podem ser interpretados viram NaT, sem lançar exceção.
    """
    if not valor_preenchido(valor):
        return pd.NaT
    if isinstance(valor, (datetime, pd.Timestamp)):
        data = pd.Timestamp(valor)
    else:
        texto = str(valor).strip()
        if '/' in texto:
            data = pd.to_datetime(texto.split()[0], format='%d/%m/%Y', errors='coerce')
        else:
            data = pd.to_datetime(texto, errors='coerce')
    if data is pd.NaT or pd.isna(data):
        return pd.NaT
    # Datas com fuso são levadas para UTC e comparadas como datas "ingênuas".
    if data.tzinfo is not None:
        data = data.tz_convert(None)
    return data


def _converter_coluna_data(serie: pd.Series) -> pd.Series:
    return pd.to_datetime(serie.map(converter_data), errors='coerce')


def _converter_coluna_numerica(serie: pd.Series) -> pd.Series:
    return pd.to_numeric(serie, errors='coerce')


# ==============================================================================
# NORMALIZAÇÃO POR TIPO DE REGISTRO
# ==============================================================================

def normalizar_vendas(registros) -> pd.DataFrame:
    """
    Converte as linhas de venda da API para o esquema canônico de vendas.
    Várias linhas podem pertencer ao mesmo pedido ('pedido').

    Args:
        registros (list): Registros brutos de venda.

    Returns:
        pd.DataFrame: Vendas com as colunas de COLUNAS_VENDA.
    """
    df = _aplicar_esquema(registros, ESQUEMA_VENDA)

    df['pedido'] = _como_texto(df['pedido'])
    df['cliente_id'] = _como_texto(df['cliente_id'])
    df['produto_codigo'] = _como_texto(df['produto_codigo'])
    df['cliente_doc'] = df['cliente_doc'].map(normalizar_documento).astype(object)

    # Sem categoria informada, usa o nome do produto; sem produto, "Outros".
    df['categoria'] = df['categoria'].where(df['categoria'].map(valor_preenchido).astype(bool), df['produto'])
    df['categoria'] = df['categoria'].where(df['categoria'].map(valor_preenchido).astype(bool), 'Outros')

    df['valor_unitario'] = _converter_coluna_numerica(df['valor_unitario'])
    df['total_pedido'] = _converter_coluna_numerica(df['total_pedido'])
    df['data'] = _converter_coluna_data(df['data'])
    return df


def normalizar_clientes(registros) -> pd.DataFrame:
    """Converte o cadastro de clientes da API para o esquema canônico de clientes."""
    df = _aplicar_esquema(registros, ESQUEMA_CLIENTE)
    df['id'] = _como_texto(df['id'])
    df['doc'] = df['doc'].map(normalizar_documento).astype(object)
    df['ultima_compra'] = _converter_coluna_data(df['ultima_compra'])
    return df


def normalizar_estoque(registros) -> pd.DataFrame:
    df = _aplicar_esquema(registros, ESQUEMA_ESTOQUE)
    df['codigo'] = _como_texto(df['codigo'])
    for coluna in ['quantidade', 'estoque_minimo', 'estoque_maximo', 'valor_unitario']:
        df[coluna] = _converter_coluna_numerica(df[coluna])
    return df


# ==============================================================================
# ENVELOPE DAS RESPOSTAS
# ==============================================================================

def extrair_registros(payload, chave: str):
    """
    Extrai a lista de registros de uma resposta da API. A resposta pode ser a
    própria lista ou um objeto com a lista em `chave` (ex: 'vendas') ou em 'data'.

    Args:
        payload: JSON já decodificado da resposta.
        chave (str): Nome do campo que carrega a lista.

    Returns:
        tuple: (lista de registros, total informado pela API ou o tamanho da lista).
    """
    if isinstance(payload, list):
        return payload, len(payload)
    if not isinstance(payload, dict):
        return [], 0

    registros = payload.get(chave) or payload.get('data') or []
    if not isinstance(registros, list):
        registros = []
    total = payload.get('total')
    if not isinstance(total, (int, float)) or isinstance(total, bool) or not total:
        total = len(registros)
    return registros, int(total)
