# -*- coding: utf-8 -*-

# ==============================================================================
# MÓDULO DE PROCESSAMENTO E AGREGAÇÃO DOS DADOS
# ==============================================================================
# Recebe os DataFrames já normalizados (ver 'normalizacao.py') e calcula os
# indicadores do dashboard:
# 1. Receita total, receita por mês e por categoria, variação mês a mês.
# 2. Rankings de vendedores e de clientes (por pedido, sem contar linhas repetidas).
# 3. Cruzamento de vendas com o cadastro de clientes e filtros locais.
# 4. Análise de estoque, incluindo o valor unitário vindo das vendas recentes.
# 5. Cotação de produtos a partir do estoque valorizado.
# 6. Paginação e busca das tabelas.
# Todas as funções devolvem estruturas simples (listas, dicionários e números)
# prontas para serem convertidas em JSON.
# ==============================================================================


# ==============================================================================
# IMPORTAÇÃO DE BIBLIOTECAS
# ==============================================================================
import json
import math
from datetime import datetime

import pandas as pd

import config_conexao as cfg
from normalizacao import valor_preenchido


# ==============================================================================
# CONSTANTES
# ==============================================================================

# Abreviação dos meses em pt-BR e a ordem cronológica de cada uma.
MESES_ABREVIADOS = {
    1: 'jan', 2: 'fev', 3: 'mar', 4: 'abr', 5: 'mai', 6: 'jun',
    7: 'jul', 8: 'ago', 9: 'set', 10: 'out', 11: 'nov', 12: 'dez',
}
ORDEM_MESES = {abreviacao: numero for numero, abreviacao in MESES_ABREVIADOS.items()}

VENDEDOR_DESCONHECIDO = 'Vendedor Desconhecido'
CLIENTE_DESCONHECIDO = 'Cliente Desconhecido'

# Faixas de dias desde a última compra, na ordem em que são exibidas.
FAIXAS_ULTIMA_COMPRA = ['0-30 dias', '31-60 dias', '61-90 dias', '91-180 dias', '181-365 dias', 'Mais de 1 ano']


# ==============================================================================
# FUNÇÕES AUXILIARES
# ==============================================================================

def _registros(df: pd.DataFrame) -> list:
    """Converte um DataFrame em lista de dicionários serializáveis (NaN/NaT viram None)."""
    if df.empty:
        return []
    return json.loads(df.to_json(orient='records', date_format='iso'))


def _valores(vendas: pd.DataFrame, padrao=0) -> pd.Series:
    return vendas['total_pedido'].fillna(padrao)


def _hoje(hoje=None) -> pd.Timestamp:
    return pd.Timestamp(hoje if hoje is not None else datetime.now()).normalize()


def _mapa_clientes_por_doc(clientes) -> dict:
    """Indexa o cadastro de clientes pelo documento normalizado (o último registro prevalece)."""
    if clientes is None or clientes.empty:
        return {}
    return {registro['doc']: registro for registro in clientes.to_dict('records') if registro['doc']}


# ==============================================================================
# RECEITA
# ==============================================================================

def calcular_receita_total(vendas: pd.DataFrame) -> float:
    """Soma o valor de todas as linhas de venda."""
    if vendas.empty:
        return 0.0
    return float(_valores(vendas).sum())


def calcular_receita_mensal(vendas: pd.DataFrame, ordenar: str = 'cronologica') -> list:
    """
    Agrupa a receita por mês do calendário. Cada mês é identificado pelo ano e
    rotulado com a abreviação em pt-BR ('jan', 'fev', ...).

    Args:
        vendas (pd.DataFrame): Vendas normalizadas.
        ordenar (str): 'cronologica' (ano e depois a ordem do mês) ou 'alfabetica' (pelo rótulo).

    Returns:
        list: [{'mes': 'dez', 'ano': 2024, 'receita': 1500}, ...]. Linhas sem data válida são ignoradas.
    """
    if ordenar not in ('cronologica', 'alfabetica'):
        raise ValueError(f"Ordenação desconhecida: {ordenar}")

    if vendas.empty:
        return []
    com_data = vendas[vendas['data'].notna()]
    if com_data.empty:
        return []

    df = pd.DataFrame({
        'ano': com_data['data'].dt.year.astype(int),
        'mes': com_data['data'].dt.month.astype(int).map(MESES_ABREVIADOS),
        'receita': _valores(com_data),
    })
    mensal = df.groupby(['ano', 'mes'], sort=False)['receita'].sum().reset_index()

    if ordenar == 'alfabetica':
        mensal = mensal.sort_values('mes', kind='stable')
    else:
        mensal['ordem'] = mensal['mes'].map(ORDEM_MESES)
        mensal = mensal.sort_values(['ano', 'ordem'], kind='stable')

    return [
        {'mes': linha.mes, 'ano': int(linha.ano), 'receita': int(round(linha.receita))}
        for linha in mensal.itertuples(index=False)
    ]


def calcular_vendas_por_categoria(vendas: pd.DataFrame, top: int = cfg.TOP_CATEGORIAS) -> list:
    """Receita por categoria/marca, do maior para o menor. Linhas sem valor contam como 1."""
    if vendas.empty:
        return []
    por_categoria = _valores(vendas, padrao=1).groupby(vendas['categoria'], sort=False).sum()
    por_categoria = por_categoria.sort_values(ascending=False, kind='stable').head(top)
    return [{'categoria': categoria, 'vendas': int(round(valor))} for categoria, valor in por_categoria.items()]


def calcular_receita_mes(vendas: pd.DataFrame, ano: int, mes: int) -> float:
    if vendas.empty:
        return 0.0
    mascara = (vendas['data'].dt.year == ano) & (vendas['data'].dt.month == mes)
    return float(_valores(vendas[mascara]).sum())


def _mes_anterior(ano: int, mes: int):
    return (ano - 1, 12) if mes == 1 else (ano, mes - 1)


def calcular_receita_mes_atual(vendas: pd.DataFrame, referencia=None) -> float:
    referencia = pd.Timestamp(referencia if referencia is not None else datetime.now())
    return calcular_receita_mes(vendas, referencia.year, referencia.month)


def calcular_receita_mes_anterior(vendas: pd.DataFrame, referencia=None) -> float:
    referencia = pd.Timestamp(referencia if referencia is not None else datetime.now())
    return calcular_receita_mes(vendas, *_mes_anterior(referencia.year, referencia.month))


def calcular_variacao_receita(vendas: pd.DataFrame, referencia=None) -> float:
    """
    Variação percentual da receita do mês de referência em relação ao mês anterior,
    com uma casa decimal. Sem receita no mês anterior, a variação é 0.
    """
    atual = calcular_receita_mes_atual(vendas, referencia)
    anterior = calcular_receita_mes_anterior(vendas, referencia)
    if anterior == 0:
        return 0.0
    return round((atual - anterior) / anterior * 100, 1)


# ==============================================================================
# INDICADORES (KPIs)
# ==============================================================================

def contar_pedidos_unicos(vendas: pd.DataFrame) -> int:
    """Conta pedidos distintos, não linhas da API."""
    if vendas.empty:
        return 0
    return int(vendas['pedido'].dropna().nunique())


def contar_clientes_unicos(vendas: pd.DataFrame) -> int:
    """Conta clientes distintos pelo documento; na falta dele, pelo nome e depois pelo código."""
    if vendas.empty:
        return 0
    chave = vendas['cliente_doc'].where(vendas['cliente_doc'].notna(), vendas['cliente_nome'])
    chave = chave.where(chave.notna(), vendas['cliente_id'])
    return int(chave.dropna().nunique())


def calcular_ticket_medio(receita: float, pedidos: int) -> float:
    return receita / pedidos if pedidos > 0 else 0.0


def calcular_taxa_conversao(pedidos: int, clientes: int) -> str:
    if clientes == 0:
        return '0.00'
    return f"{pedidos / clientes * 100:.2f}"


def obter_pedidos_recentes(vendas: pd.DataFrame, clientes=None, limite: int = cfg.TOP_PEDIDOS_RECENTES) -> list:
    """
    Lista as vendas mais recentes (sem data vão para o fim).

    O nome do cliente vem da própria venda; na falta dele, do cadastro de clientes
    pelo código do cliente.
    """
    if vendas.empty:
        return []

    nomes_por_id = {}
    if clientes is not None and not clientes.empty:
        for id_cliente, nome in zip(clientes['id'], clientes['nome']):
            if id_cliente is not None:
                nomes_por_id[id_cliente] = nome if valor_preenchido(nome) else 'Cliente'

    recentes = vendas.sort_values('data', ascending=False, na_position='last', kind='stable').head(limite)

    pedidos = []
    for venda in recentes.itertuples(index=False):
        nome = venda.cliente_nome if valor_preenchido(venda.cliente_nome) else nomes_por_id.get(venda.cliente_id)
        valor = venda.total_pedido if pd.notna(venda.total_pedido) else 0
        pedidos.append({
            'id': venda.pedido if valor_preenchido(venda.pedido) else 'N/A',
            'cliente': nome or CLIENTE_DESCONHECIDO,
            'cliente_doc': venda.cliente_doc if valor_preenchido(venda.cliente_doc) else '',
            'valor': f"R$ {float(valor):.2f}",
            'status': venda.status if valor_preenchido(venda.status) else 'completed',
        })
    return pedidos


# ==============================================================================
# RANKINGS DE VENDEDORES E CLIENTES
# ==============================================================================

def deduplicar_pedidos(vendas: pd.DataFrame) -> pd.DataFrame:
    """
    Mantém apenas as vendas com status OK e uma única linha por pedido (a primeira).
    O valor do pedido se repete em todas as suas linhas, então somar sem esta
    etapa contaria o mesmo pedido várias vezes.
    """
    if vendas.empty:
        return vendas
    vendas_ok = vendas[(vendas['status'] == cfg.STATUS_OK) & vendas['pedido'].notna()]
    return vendas_ok.drop_duplicates(subset='pedido', keep='first')


def ranking_vendedores(vendas: pd.DataFrame) -> list:
    """
    Ranking de vendedores por valor vendido.

    Returns:
        list: Um dicionário por vendedor com 'nome', 'total', 'pedidos', 'clientes'
              (documentos distintos), 'ticket_medio' e 'clientes_detalhes', do maior
              total para o menor. Empates mantêm a ordem em que o vendedor apareceu.
    """
    pedidos = deduplicar_pedidos(vendas)
    if pedidos.empty:
        return []

    pedidos = pedidos.assign(
        vendedor=pedidos['vendedor'].fillna(VENDEDOR_DESCONHECIDO),
        cliente_nome=pedidos['cliente_nome'].fillna(CLIENTE_DESCONHECIDO),
        valor=_valores(pedidos),
    )

    agrupado = pedidos.groupby('vendedor', sort=False).agg(
        total=('valor', 'sum'),
        pedidos=('pedido', 'count'),
        clientes=('cliente_doc', 'nunique'),
    )
    agrupado = agrupado.sort_values('total', ascending=False, kind='stable')

    # Cada cliente fica na posição em que apareceu, com o último nome registrado.
    nomes = (
        pedidos[pedidos['cliente_doc'].notna()]
        .groupby(['vendedor', 'cliente_doc'], sort=False)['cliente_nome'].last()
    )
    detalhes = {}
    for (vendedor, doc), nome in nomes.items():
        detalhes.setdefault(vendedor, []).append({'doc': doc, 'nome': nome})

    return [
        {
            'nome': vendedor,
            'total': float(linha.total),
            'pedidos': int(linha.pedidos),
            'clientes': int(linha.clientes),
            'ticket_medio': calcular_ticket_medio(float(linha.total), int(linha.pedidos)),
            'clientes_detalhes': detalhes.get(vendedor, []),
        }
        for vendedor, linha in agrupado.iterrows()
    ]


def estatisticas_vendedores(ranking: list) -> dict:
    return {
        'total_vendedores': len(ranking),
        'total_vendas': sum(vendedor['total'] for vendedor in ranking),
        'total_pedidos': sum(vendedor['pedidos'] for vendedor in ranking),
    }


def ranking_clientes(vendas: pd.DataFrame) -> list:
    """
    Ranking completo de clientes por valor comprado, agrupado pelo documento
    normalizado. Vendas sem documento não entram no ranking.
    """
    pedidos = deduplicar_pedidos(vendas)
    if pedidos.empty:
        return []
    pedidos = pedidos[pedidos['cliente_doc'].notna()]
    if pedidos.empty:
        return []

    uf = pedidos['cliente_uf'] if 'cliente_uf' in pedidos.columns else pd.Series(None, index=pedidos.index, dtype=object)
    pedidos = pedidos.assign(
        cliente_nome=pedidos['cliente_nome'].fillna(CLIENTE_DESCONHECIDO),
        cliente_uf=uf.fillna('N/A'),
        valor=_valores(pedidos),
    )

    agrupado = pedidos.groupby('cliente_doc', sort=False).agg(
        nome=('cliente_nome', 'first'),
        uf=('cliente_uf', 'first'),
        total=('valor', 'sum'),
        pedidos=('pedido', 'count'),
    )
    agrupado = agrupado.sort_values('total', ascending=False, kind='stable')

    return [
        {'doc': doc, 'nome': linha.nome, 'total': float(linha.total), 'uf': linha.uf, 'pedidos': int(linha.pedidos)}
        for doc, linha in agrupado.iterrows()
    ]


def contar_clientes_ativos(vendas: pd.DataFrame) -> int:
    """Clientes distintos (por documento) com ao menos uma venda OK."""
    if vendas.empty:
        return 0
    return int(vendas.loc[vendas['status'] == cfg.STATUS_OK, 'cliente_doc'].dropna().nunique())


def carteira_clientes(vendas: pd.DataFrame, clientes=None) -> list:
    """
    Carteira de cada vendedor: os clientes distintos atendidos em vendas OK,
    completados com os dados do cadastro. Clientes em ordem alfabética; vendedores
    do que tem mais clientes para o que tem menos.
    """
    if vendas.empty:
        return []
    vendas_ok = vendas[(vendas['status'] == cfg.STATUS_OK) & vendas['cliente_doc'].notna()]
    if vendas_ok.empty:
        return []

    vendas_ok = vendas_ok.assign(
        vendedor=vendas_ok['vendedor'].fillna(VENDEDOR_DESCONHECIDO),
        cliente_nome=vendas_ok['cliente_nome'].fillna(CLIENTE_DESCONHECIDO),
    )
    unicos = vendas_ok.drop_duplicates(subset=['vendedor', 'cliente_doc'])
    cadastro = _mapa_clientes_por_doc(clientes)

    carteira = []
    for vendedor, grupo in unicos.groupby('vendedor', sort=False):
        lista = []
        for venda in grupo.itertuples(index=False):
            cliente = cadastro.get(venda.cliente_doc, {})
            lista.append({
                'nome': cliente.get('nome') or venda.cliente_nome,
                'doc': venda.cliente_doc,
                'email': cliente.get('email'),
                'telefone': cliente.get('telefone'),
                'cidade': cliente.get('cidade'),
                'uf': cliente.get('uf'),
                'grupo': cliente.get('grupo'),
            })
        lista.sort(key=lambda c: c['nome'].lower())
        carteira.append({'vendedor': vendedor, 'total_clientes': len(lista), 'clientes': lista})

    carteira.sort(key=lambda v: v['total_clientes'], reverse=True)
    return carteira


# ==============================================================================
# CRUZAMENTO COM CLIENTES E FILTROS
# ==============================================================================

def enriquecer_vendas_com_clientes(vendas: pd.DataFrame, clientes) -> pd.DataFrame:
    """
    Junta a cada venda o grupo e a UF do cliente, comparando os documentos
    apenas pelos dígitos. Vendas sem cliente correspondente recebem UF 'N/A'.
    """
    df = vendas.copy()
    if clientes is None or clientes.empty:
        df['cliente_grupo'] = None
        df['cliente_uf'] = 'N/A'
        return df

    cadastro = clientes[clientes['doc'].notna()].drop_duplicates(subset='doc', keep='last')
    cadastro = cadastro[['doc', 'grupo', 'uf']].rename(columns={'doc': 'cliente_doc', 'grupo': 'cliente_grupo', 'uf': 'cliente_uf'})

    df = pd.merge(df, cadastro, on='cliente_doc', how='left')
    df['cliente_grupo'] = df['cliente_grupo'].astype(object).where(df['cliente_grupo'].notna(), None)
    df['cliente_uf'] = df['cliente_uf'].fillna('N/A')
    return df


def filtrar_vendas(vendas: pd.DataFrame, status=None, tipo_cliente=None, grupo=None, vendedor=None) -> pd.DataFrame:
    """
    Aplica os filtros locais do dashboard.

    Args:
        status (list, optional): Status aceitos.
        tipo_cliente (str, optional): 'pf' (CPF, 11 dígitos) ou 'pj' (CNPJ, 14 dígitos).
                                      Com qualquer tipo informado, vendas sem documento saem.
        grupo (str, optional): Grupo do cliente (exige vendas enriquecidas).
        vendedor (str, optional): Nome do vendedor.
    """
    df = vendas
    if status:
        df = df[df['status'].isin(list(status))]
    if tipo_cliente:
        tamanhos = {'pf': 11, 'pj': 14}
        tamanho = tamanhos.get(tipo_cliente)
        df = df[df['cliente_doc'].map(
            lambda doc: isinstance(doc, str) and (tamanho is None or len(doc) == tamanho)
        ).astype(bool)]
    if grupo:
        grupos = df['cliente_grupo'] if 'cliente_grupo' in df.columns else pd.Series(None, index=df.index, dtype=object)
        df = df[grupos == grupo]
    if vendedor:
        df = df[df['vendedor'] == vendedor]
    return df.reset_index(drop=True)


def _distintos_ordenados(serie: pd.Series) -> list:
    return sorted({valor for valor in serie.dropna() if isinstance(valor, str) and valor})


def listar_status(vendas: pd.DataFrame) -> list:
    if vendas.empty:
        return []
    return _distintos_ordenados(vendas['status'])


def listar_vendedores(vendas: pd.DataFrame) -> list:
    if vendas.empty:
        return []
    return _distintos_ordenados(vendas['vendedor'])


def listar_grupos(vendas: pd.DataFrame) -> list:
    """Grupos dos clientes que aparecem nas vendas (exige vendas enriquecidas)."""
    if vendas is None or vendas.empty or 'cliente_grupo' not in vendas.columns:
        return []
    return _distintos_ordenados(vendas['cliente_grupo'])


# ==============================================================================
# ANÁLISE DE CLIENTES
# ==============================================================================

def distribuicao_por_uf(clientes: pd.DataFrame) -> list:
    """Quantidade de clientes por UF, do estado com mais clientes para o com menos."""
    if clientes is None or clientes.empty:
        return []
    ufs = clientes['uf'].fillna('N/A')
    contagem = ufs.groupby(ufs, sort=False).size().sort_values(ascending=False, kind='stable')
    return [{'uf': uf, 'quantidade': int(quantidade)} for uf, quantidade in contagem.items()]


def _faixa_dias(dias: int) -> str:
    if dias <= 30:
        return '0-30 dias'
    if dias <= 60:
        return '31-60 dias'
    if dias <= 90:
        return '61-90 dias'
    if dias <= 180:
        return '91-180 dias'
    if dias <= 365:
        return '181-365 dias'
    return 'Mais de 1 ano'


def analise_ultima_compra(clientes: pd.DataFrame, hoje=None) -> dict:
    """
    Tempo desde a última compra de cada cliente: média em dias, distribuição
    por faixas e quantidade de clientes inativos (sem compra há mais de
    DIAS_INATIVIDADE dias). Datas futuras ou inválidas são ignoradas.
    """
    if clientes is None or clientes.empty:
        return {'media': 0, 'distribuicao': [], 'clientes_inativos': 0}

    dias = (_hoje(hoje) - clientes['ultima_compra'].dropna()).dt.days
    dias = dias[dias >= 0]

    media = int(round(dias.mean())) if not dias.empty else 0
    faixas = dias.apply(_faixa_dias).value_counts().reindex(FAIXAS_ULTIMA_COMPRA, fill_value=0)

    return {
        'media': media,
        'distribuicao': [{'faixa': faixa, 'quantidade': int(quantidade)} for faixa, quantidade in faixas.items()],
        'clientes_inativos': int((dias > cfg.DIAS_INATIVIDADE).sum()),
    }


# ==============================================================================
# ESTOQUE
# ==============================================================================

def enriquecer_estoque_com_valores(estoque: pd.DataFrame, vendas: pd.DataFrame, hoje=None,
                                   janela_dias: int = cfg.JANELA_VALORES_DIAS) -> pd.DataFrame:
    """
    Define o valor unitário de cada item de estoque a partir da venda mais
    recente do mesmo produto dentro da janela de dias. Sem venda, vale o valor
    do próprio estoque; sem nenhum dos dois, zero.

    Args:
        estoque (pd.DataFrame): Itens de estoque normalizados.
        vendas (pd.DataFrame): Vendas normalizadas.
        hoje: Data de referência (padrão: agora).
        janela_dias (int): Tamanho da janela de vendas consideradas.

    Returns:
        pd.DataFrame: Cópia do estoque com 'valor_unitario' atualizado e a coluna
                      'valor_origem' ('vendas', 'estoque' ou 'zero').
    """
    resultado = estoque.copy()
    referencia = _hoje(hoje)
    inicio = referencia - pd.Timedelta(days=janela_dias)
    fim = referencia + pd.Timedelta(days=1)

    valores_por_produto = {}
    if not vendas.empty:
        recentes = vendas[(vendas['data'] >= inicio) & (vendas['data'] < fim)]
        recentes = recentes[recentes['produto_codigo'].notna() & (recentes['valor_unitario'].fillna(0) != 0)]
        # Da venda mais nova para a mais antiga: a primeira de cada produto vale.
        recentes = recentes.sort_values('data', ascending=False, kind='stable')
        recentes = recentes.drop_duplicates(subset='produto_codigo', keep='first')
        valores_por_produto = dict(zip(recentes['produto_codigo'], recentes['valor_unitario']))

    valor_venda = resultado['codigo'].map(valores_por_produto)
    valor_estoque = resultado['valor_unitario'].fillna(0)
    tem_venda = valor_venda.notna()

    resultado['valor_origem'] = 'zero'
    resultado.loc[valor_estoque != 0, 'valor_origem'] = 'estoque'
    resultado.loc[tem_venda, 'valor_origem'] = 'vendas'
    resultado['valor_unitario'] = valor_venda.where(tem_venda, valor_estoque).astype(float)
    return resultado


def analise_estoque(estoque: pd.DataFrame, top: int = cfg.TOP_GRAFICO):
    """Indicadores de estoque e listas de itens críticos e de maior valor. None se não houver itens."""
    if estoque.empty:
        return None

    quantidade = estoque['quantidade'].fillna(0)
    df = estoque.assign(valor_total=quantidade * estoque['valor_unitario'].fillna(0))
    abaixo_minimo = estoque['estoque_minimo'].fillna(0).gt(0) & (estoque['quantidade'] < estoque['estoque_minimo'])

    baixo_estoque = df[abaixo_minimo].sort_values('quantidade', kind='stable').head(top)
    maior_valor = df.sort_values('valor_total', ascending=False, kind='stable').head(top)

    return {
        'total_itens': int(len(estoque)),
        'quantidade_total': float(quantidade.sum()),
        'valor_total': float(df['valor_total'].sum()),
        'itens_abaixo_minimo': int(abaixo_minimo.sum()),
        'produtos_baixo_estoque': _registros(baixo_estoque),
        'produtos_maior_valor': _registros(maior_valor),
    }


# ==============================================================================
# COTAÇÃO
# ==============================================================================

class ErroCotacao(ValueError):
    """Item de cotação inválido. `campo` aponta o item e o campo com problema (ex: 'itens[1].quantidade')."""

    def __init__(self, campo: str, mensagem: str):
        super().__init__(f"{campo}: {mensagem}")
        self.campo = campo
        self.mensagem = mensagem


def montar_cotacao(estoque: pd.DataFrame, itens) -> dict:
    """
    Monta uma cotação a partir do estoque já valorizado
    (ver enriquecer_estoque_com_valores).

    Args:
        estoque (pd.DataFrame): Itens de estoque com 'valor_unitario' atualizado.
        itens (list): [{'codigo': 'P1', 'quantidade': 2}, ...]. Sem quantidade, vale 1.

    Returns:
        dict: {'itens': [...], 'quantidade_total', 'valor_total'}, com o subtotal
              (valor unitário x quantidade) de cada produto.

    Raises:
        ErroCotacao: Produto repetido ou fora do estoque, ou quantidade menor que 1.
    """
    if not isinstance(itens, list) or not itens:
        raise ErroCotacao('itens', "informe ao menos um produto")

    produtos = {}
    if not estoque.empty:
        produtos = {registro['codigo']: registro for registro in estoque.to_dict('records') if registro['codigo']}

    linhas = []
    for posicao, item in enumerate(itens):
        prefixo = f"itens[{posicao}]"
        if not isinstance(item, dict):
            raise ErroCotacao(prefixo, "deve ser um objeto com 'codigo' e 'quantidade'")

        codigo = str(item.get('codigo') or '').strip()
        if not codigo:
            raise ErroCotacao(f"{prefixo}.codigo", "obrigatório")
        if any(linha['codigo'] == codigo for linha in linhas):
            raise ErroCotacao(f"{prefixo}.codigo", f"o produto '{codigo}' já está na cotação")
        if codigo not in produtos:
            raise ErroCotacao(f"{prefixo}.codigo", f"o produto '{codigo}' não está no estoque")

        quantidade = item.get('quantidade', 1)
        if isinstance(quantidade, bool) or not isinstance(quantidade, int) or quantidade < 1:
            raise ErroCotacao(f"{prefixo}.quantidade", "deve ser um número inteiro maior ou igual a 1")

        produto = produtos[codigo]
        valor_unitario = float(produto['valor_unitario']) if valor_preenchido(produto['valor_unitario']) else 0.0
        linhas.append({
            'codigo': codigo,
            'nome': produto.get('nome'),
            'quantidade': quantidade,
            'valor_unitario': valor_unitario,
            'valor_origem': produto.get('valor_origem'),
            'subtotal': valor_unitario * quantidade,
        })

    return {
        'itens': linhas,
        'quantidade_total': sum(linha['quantidade'] for linha in linhas),
        'valor_total': sum(linha['subtotal'] for linha in linhas),
    }


# ==============================================================================
# PAGINAÇÃO E BUSCA
# ==============================================================================

def paginar(itens, pagina: int = 1, itens_por_pagina: int = cfg.ITENS_POR_PAGINA) -> dict:
    """
    Recorta uma lista em páginas (a primeira página é 1). Páginas fora do
    intervalo são ajustadas para a primeira ou a última.
    """
    if itens_por_pagina <= 0:
        raise ValueError("itens_por_pagina deve ser maior que zero")

    itens = list(itens)
    total = len(itens)
    total_paginas = math.ceil(total / itens_por_pagina)
    pagina = max(1, min(pagina, total_paginas or 1))
    inicio = (pagina - 1) * itens_por_pagina

    return {
        'itens': itens[inicio:inicio + itens_por_pagina],
        'pagina': pagina,
        'total': total,
        'total_paginas': total_paginas,
        'has_more': pagina < total_paginas,
    }


def buscar_pedidos(pedidos: list, termo: str) -> list:
    """Filtra pedidos pelo número, pelo nome do cliente ou pelos dígitos do documento."""
    if not termo or not termo.strip():
        return pedidos
    busca = termo.strip().lower()
    digitos = ''.join(c for c in busca if c.isdigit())

    def corresponde(pedido):
        if busca in str(pedido.get('id', '')).lower() or busca in str(pedido.get('cliente', '')).lower():
            return True
        doc = ''.join(c for c in str(pedido.get('cliente_doc') or '') if c.isdigit())
        return bool(digitos) and digitos in doc

    return [pedido for pedido in pedidos if corresponde(pedido)]
