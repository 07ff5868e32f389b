# -*- coding: utf-8 -*-

# ==============================================================================
# IMPORTAÇÃO DE BIBLIOTECAS
# ==============================================================================
# Importa as bibliotecas necessárias para o funcionamento da aplicação.
from flask import Flask, jsonify, request  # Componentes do Flask para criar o servidor web e manipular requisições.
import logging  # Para registrar informações, avisos e erros da aplicação.
import calendar  # Para o último dia do mês no período padrão.
from datetime import datetime  # Para validar as datas recebidas nos filtros.

# Importa as configurações (arquivo e nível de log, tamanho de página).
import config_conexao as cfg
import conexao_api as api
import processamento as proc

# ==============================================================================
# INICIALIZAÇÃO DA APLICAÇÃO FLASK
# ==============================================================================
# Cria uma instância da aplicação Flask.
app = Flask(__name__)


# ==============================================================================
# CONFIGURAÇÃO DO LOGGING
# ==============================================================================
def configurar_logging():
    """
    Configura o logger principal para escrever no arquivo de log (modo 'append')
    e no console, com data, hora, nível e mensagem.
    """
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    logger = logging.getLogger()
    logger.setLevel(cfg.LOG_LEVEL)

    # Remove handlers anteriores para não duplicar as mensagens.
    if logger.hasHandlers():
        logger.handlers.clear()

    file_handler = logging.FileHandler(cfg.LOG_FILE, mode='a')
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)


# ==============================================================================
# VALIDAÇÃO DOS PARÂMETROS DA URL
# ==============================================================================

class ErroValidacao(Exception):
    """Parâmetro de consulta inválido. Vira uma resposta 400 com a mensagem por campo."""

    def __init__(self, campo: str, mensagem: str):
        super().__init__(f"{campo}: {mensagem}")
        self.campo = campo
        self.mensagem = mensagem


@app.errorhandler(ErroValidacao)
def tratar_erro_validacao(erro):
    return jsonify({'error': 'Parâmetros inválidos', 'campos': {erro.campo: erro.mensagem}}), 400


def _ler_inteiro(nome: str, minimo: int = None):
    """Lê um parâmetro inteiro opcional da URL. Retorna None se ausente."""
    valor = request.args.get(nome)
    if valor is None or valor.strip() == '':
        return None
    try:
        numero = int(valor)
    except ValueError:
        raise ErroValidacao(nome, f"deve ser um número inteiro (recebido: '{valor}')")
    if minimo is not None and numero < minimo:
        raise ErroValidacao(nome, f"deve ser maior ou igual a {minimo}")
    return numero


def _ler_data(nome: str):
    """Lê uma data opcional no formato AAAA-MM-DD."""
    valor = request.args.get(nome)
    if not valor:
        return None
    try:
        datetime.strptime(valor, '%Y-%m-%d')
    except ValueError:
        raise ErroValidacao(nome, f"deve estar no formato AAAA-MM-DD (recebido: '{valor}')")
    return valor


def _ler_paginacao() -> dict:
    return {
        'page': _ler_inteiro('page', minimo=1),
        'limit': _ler_inteiro('limit', minimo=0),
        'limite': _ler_inteiro('limite', minimo=0),
    }


def _periodo_mes_atual():
    """Primeiro e último dia do mês corrente, no formato AAAA-MM-DD."""
    hoje = datetime.now()
    ultimo_dia = calendar.monthrange(hoje.year, hoje.month)[1]
    return hoje.replace(day=1).strftime('%Y-%m-%d'), hoje.replace(day=ultimo_dia).strftime('%Y-%m-%d')


def _ler_filtros_dashboard(mes_atual_por_padrao: bool = False) -> dict:
    """
    Filtros comuns às rotas do dashboard. Com `mes_atual_por_padrao`, a ausência
    de 'dataInicio' e 'dataFim' seleciona o mês corrente.
    """
    tipo_cliente = request.args.get('tipoCliente') or None
    if tipo_cliente not in (None, 'pf', 'pj'):
        raise ErroValidacao('tipoCliente', "deve ser 'pf' ou 'pj'")
    data_inicio, data_fim = _ler_data('dataInicio'), _ler_data('dataFim')
    if mes_atual_por_padrao and data_inicio is None and data_fim is None:
        data_inicio, data_fim = _periodo_mes_atual()
    return {
        'data_inicio': data_inicio,
        'data_fim': data_fim,
        'status': [s for s in request.args.getlist('status') if s],
        'tipo_cliente': tipo_cliente,
        'grupo': request.args.get('grupo') or None,
        'vendedor': request.args.get('vendedor') or None,
    }


def _carregar_vendas_enriquecidas(filtros: dict):
    """
    Busca vendas do período e clientes (com os dados de exemplo como reserva)
    e junta a cada venda o grupo e a UF do cliente.
    """
    vendas = api.buscar_vendas({'data_inicio': filtros['data_inicio'], 'data_fim': filtros['data_fim']})
    clientes = api.buscar_clientes()
    return proc.enriquecer_vendas_com_clientes(vendas, clientes), clientes


def _aplicar_filtros(vendas, filtros: dict):
    return proc.filtrar_vendas(
        vendas,
        status=filtros['status'],
        tipo_cliente=filtros['tipo_cliente'],
        grupo=filtros['grupo'],
        vendedor=filtros['vendedor'],
    )


def _carregar_vendas_filtradas(filtros: dict):
    """Vendas enriquecidas com os filtros locais aplicados, e o cadastro de clientes."""
    vendas, clientes = _carregar_vendas_enriquecidas(filtros)
    return _aplicar_filtros(vendas, filtros), clientes


# ==============================================================================
# ROTAS DE REPASSE PARA A API DE DADOS
# ==============================================================================
# Repassam a consulta à API e devolvem o resultado sem agregação. Em caso de
# falha, o corpo traz o erro e o status devolvido pela API.

@app.route('/api/vendas')
def api_vendas():
    filtros = _ler_paginacao()
    filtros.update(
        data_inicio=_ler_data('data_inicio'),
        data_fim=_ler_data('data_fim'),
        status_pedido=request.args.getlist('status_pedido') or None,
    )
    corpo, status = api.consultar_proxy('vendas', filtros)
    return jsonify(corpo), status


@app.route('/api/clientes')
def api_clientes():
    filtros = {'page': _ler_inteiro('page', minimo=1), 'limit': _ler_inteiro('limit', minimo=0)}
    corpo, status = api.consultar_proxy('clientes', filtros)
    return jsonify(corpo), status


@app.route('/api/estoque')
def api_estoque():
    filtros = _ler_paginacao()
    filtros.update(
        codigo_produto=request.args.get('codigo_produto') or None,
        nome_produto=request.args.get('nome_produto') or None,
        estoque_min=_ler_inteiro('estoque_min', minimo=0),
        estoque_max=_ler_inteiro('estoque_max', minimo=0),
    )
    corpo, status = api.consultar_proxy('estoque', filtros)
    return jsonify(corpo), status


@app.route('/api/vendas/status')
def api_status_vendas():
    """Lista os status de pedido existentes, para montar o filtro do front-end."""
    status = api.listar_status_vendas({
        'data_inicio': _ler_data('dataInicio'),
        'data_fim': _ler_data('dataFim'),
    })
    return jsonify(status=status)


# ==============================================================================
# ROTAS DO DASHBOARD
# ==============================================================================
# Estas rotas usam as buscas com dados de exemplo como reserva, então sempre
# respondem com dados, mesmo com a API fora do ar.

@app.route('/api/dados-dashboard-geral')
def api_dashboard_geral_data():
    """
    API principal para o 'Dashboard Geral'.
    Retorna os KPIs, a receita mensal, as categorias mais vendidas, os pedidos
    recentes (com busca opcional por 'busca') e as opções dos filtros.
    Sem período informado, considera o mês corrente. As opções dos filtros
    vêm das vendas do período antes dos filtros locais.
    """
    filtros = _ler_filtros_dashboard(mes_atual_por_padrao=True)
    vendas_periodo, clientes = _carregar_vendas_enriquecidas(filtros)
    vendas = _aplicar_filtros(vendas_periodo, filtros)

    receita_total = proc.calcular_receita_total(vendas)
    total_pedidos = proc.contar_pedidos_unicos(vendas)
    total_clientes = proc.contar_clientes_unicos(vendas)

    pedidos_recentes = proc.obter_pedidos_recentes(vendas, clientes)
    pedidos_recentes = proc.buscar_pedidos(pedidos_recentes, request.args.get('busca', ''))

    return jsonify({
        'kpis': {
            'receita_total': receita_total,
            'total_pedidos': total_pedidos,
            'total_clientes': total_clientes,
            'ticket_medio': proc.calcular_ticket_medio(receita_total, total_pedidos),
            'taxa_conversao': proc.calcular_taxa_conversao(total_pedidos, total_clientes),
            'receita_mes_atual': proc.calcular_receita_mes_atual(vendas),
            'receita_mes_anterior': proc.calcular_receita_mes_anterior(vendas),
            'variacao_receita': proc.calcular_variacao_receita(vendas),
        },
        'receita_mensal': proc.calcular_receita_mensal(vendas),
        'vendas_por_categoria': proc.calcular_vendas_por_categoria(vendas),
        'pedidos_recentes': pedidos_recentes,
        'opcoes_filtros': {
            'status': proc.listar_status(vendas_periodo),
            'grupos': proc.listar_grupos(vendas_periodo),
            'vendedores': proc.listar_vendedores(vendas_periodo),
        },
    })


@app.route('/api/analise-vendedores')
def api_analise_vendedores():
    """Ranking de vendedores (um pedido conta uma vez) e dados do gráfico dos principais."""
    filtros = _ler_filtros_dashboard()
    vendas, _ = _carregar_vendas_filtradas(filtros)

    ranking = proc.ranking_vendedores(vendas)
    top = ranking[:cfg.TOP_GRAFICO]
    return jsonify({
        'vendedores': ranking,
        'estatisticas': proc.estatisticas_vendedores(ranking),
        'grafico': {'labels': [v['nome'] for v in top], 'data': [v['total'] for v in top]},
    })


@app.route('/api/analise-clientes')
def api_analise_clientes():
    """
    Ranking de clientes paginado ('pagina'), distribuição por UF e tempo desde
    a última compra.
    """
    filtros = _ler_filtros_dashboard()
    pagina = _ler_inteiro('pagina', minimo=1) or 1
    vendas, clientes = _carregar_vendas_filtradas(filtros)

    ranking = proc.ranking_clientes(vendas)
    return jsonify({
        'ranking': proc.paginar(ranking, pagina, cfg.ITENS_POR_PAGINA),
        'total_clientes': int(len(clientes)),
        'clientes_ativos': proc.contar_clientes_ativos(vendas),
        'distribuicao_uf': proc.distribuicao_por_uf(clientes),
        'ultima_compra': proc.analise_ultima_compra(clientes),
    })


@app.route('/api/carteira-clientes')
def api_carteira_clientes():
    """Carteira de clientes de cada vendedor."""
    filtros = _ler_filtros_dashboard()
    vendas, clientes = _carregar_vendas_filtradas(filtros)

    carteira = proc.carteira_clientes(vendas, clientes)
    return jsonify({
        'carteira': carteira,
        'total_vendedores': len(carteira),
        'total_clientes': sum(v['total_clientes'] for v in carteira),
    })


@app.route('/api/analise-estoque')
def api_analise_estoque():
    """
    Indicadores de estoque com o valor unitário atualizado pelas vendas
    recentes. Sem itens de estoque, retorna um objeto vazio.
    """
    filtros = {
        'limite': cfg.LIMITE_TODOS,
        'estoque_min': _ler_inteiro('estoqueMin', minimo=0),
        'estoque_max': _ler_inteiro('estoqueMax', minimo=0),
    }
    resultado = api.buscar_estoque_com_valores(filtros)
    analise = proc.analise_estoque(resultado['estoque'])
    if analise is None:
        return jsonify({})
    return jsonify(analise)


@app.route('/api/cotacao', methods=['POST'])
def api_cotacao():
    """
    Monta uma cotação com os valores atuais do estoque.
    Corpo: {"itens": [{"codigo": "P1", "quantidade": 2}, ...]}.
    """
    corpo = request.get_json(silent=True) or {}
    estoque = api.buscar_estoque_com_valores({'limite': cfg.LIMITE_TODOS})['estoque']
    try:
        cotacao = proc.montar_cotacao(estoque, corpo.get('itens') if isinstance(corpo, dict) else None)
    except proc.ErroCotacao as e:
        raise ErroValidacao(e.campo, e.mensagem)
    return jsonify(cotacao)


# ==============================================================================
# PONTO DE ENTRADA DA APLICAÇÃO
# ==============================================================================
# Este bloco será executado apenas quando o script 'app.py' for rodado diretamente.
if __name__ == '__main__':
    configurar_logging()
    # Inicia o servidor de desenvolvimento do Flask.
    # debug=True ativa o modo de depuração, que reinicia o servidor a cada alteração no código.
    app.run(debug=True)
