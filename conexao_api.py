# -*- coding: utf-8 -*-

# ==============================================================================
# MÓDULO DE CONEXÃO COM A API DE DADOS
# ==============================================================================
# Este módulo é a camada de acesso aos dados da distribuidora.
# Suas responsabilidades incluem:
# 1. Realizar requisições seguras à API, com timeout e retentativas.
# 2. Manter um cache curto das respostas para não repetir a mesma consulta.
# 3. Montar os parâmetros de consulta (paginação e filtros) de cada recurso.
# 4. Entregar vendas, clientes e estoque já normalizados, recorrendo aos dados
#    de exemplo quando a API falha ou não devolve nada.
# 5. Atender as rotas de repasse (proxy), preservando o status de erro da API.
# ==============================================================================


# ==============================================================================
# IMPORTAÇÃO DE BIBLIOTECAS
# ==============================================================================
import requests  # Para realizar chamadas HTTP para a API.
import pandas as pd  # Para manipulação dos dados em DataFrames.
import time  # Para a pausa entre as retentativas.
import logging  # Para registrar eventos, avisos e erros da aplicação.
from datetime import datetime, timedelta  # Para a validade do cache e a janela de vendas.

# Importa as configurações globais (URLs, token, política de requisições).
import config_conexao as cfg
import dados_exemplo
import normalizacao as norm
import processamento as proc


# ==============================================================================
# EXCEÇÕES
# ==============================================================================

class ErroAPI(Exception):
    """
    Falha definitiva de uma requisição à API (depois de todas as tentativas).

    Attributes:
        status (int): Status HTTP devolvido pela API, ou 502 quando não houve resposta.
        detalhes (str): Corpo da resposta da API ou a mensagem do erro de rede.
    """

    def __init__(self, mensagem: str, status: int = 502, detalhes: str = None):
        super().__init__(mensagem)
        self.status = status
        self.detalhes = detalhes


# ==============================================================================
# CACHE DAS RESPOSTAS
# ==============================================================================
# Guarda cada resposta por (endpoint, parâmetros) junto com o momento da consulta.
_cache = {}


def limpar_cache():
    """Descarta todas as respostas guardadas."""
    _cache.clear()


def _chave_cache(url: str, params: dict = None):
    return url, tuple(sorted((chave, str(valor)) for chave, valor in (params or {}).items()))


# ==============================================================================
# REQUISIÇÕES
# ==============================================================================

def realizar_requisicao_segura(url: str, params: dict = None, headers: dict = None, retentativas: int = None):
    """
    Realiza uma requisição GET para a API de forma robusta, com um mecanismo
    de retentativas em caso de falha.

    Args:
        url (str): A URL do endpoint da API.
        params (dict, optional): Parâmetros a serem enviados na URL. Defaults to None.
        headers (dict, optional): Cabeçalhos HTTP adicionais. Defaults to None.
        retentativas (int, optional): Novas tentativas após a primeira falha.
                                      Defaults to cfg.MAX_RETENTATIVAS.

    Returns:
        dict or list: A resposta da API em formato JSON.

    Raises:
        ErroAPI: Quando todas as tentativas falham.
    """
    if retentativas is None:
        retentativas = cfg.MAX_RETENTATIVAS
    tentativas = retentativas + 1

    # O cabeçalho de autorização só é enviado quando há token configurado.
    auth_headers = {'Authorization': f'Bearer {cfg.API_AUTH_TOKEN}'} if cfg.API_AUTH_TOKEN else {}
    if headers: auth_headers.update(headers)

    logging.info(f"Iniciando requisição para a URL: {url}")
    if params: logging.info(f"Parâmetros: {params}")

    ultimo_erro = None
    for tentativa in range(1, tentativas + 1):
        try:
            response = requests.get(url, params=params, headers=auth_headers, timeout=cfg.TIMEOUT_REQUISICAO_S)
            response.raise_for_status()  # Lança um erro para status HTTP 4xx ou 5xx.
            dados = response.json()
            logging.info("Requisição bem-sucedida!")
            return dados
        except requests.exceptions.RequestException as e:
            ultimo_erro = e
            logging.warning(f"Tentativa {tentativa}/{tentativas} falhou. Erro: {e}")
            if tentativa < tentativas: time.sleep(cfg.INTERVALO_RETENTATIVAS_S)

    response = getattr(ultimo_erro, 'response', None)
    status = response.status_code if response is not None else 502
    detalhes = response.text if response is not None and response.text else str(ultimo_erro)
    logging.error(f"Todas as {tentativas} tentativas de requisição para {url} falharam.")
    raise ErroAPI(f"API request failed: {status}", status=status, detalhes=detalhes)


def _resposta_valida(momento: datetime) -> bool:
    return datetime.now() - momento < timedelta(minutes=cfg.CACHE_DURATION_MINUTES)


def _descartar_expirados():
    for chave in [chave for chave, (_, momento) in _cache.items() if not _resposta_valida(momento)]:
        del _cache[chave]


def _obter_json(url: str, params: dict = None):
    """Consulta a API passando pelo cache de respostas. Respostas vencidas saem do cache."""
    chave = _chave_cache(url, params)
    if chave in _cache:
        dados, momento = _cache[chave]
        if _resposta_valida(momento):
            logging.info(f"Usando resposta em cache para {url}.")
            return dados

    dados = realizar_requisicao_segura(url, params=params)
    _descartar_expirados()
    _cache[chave] = (dados, datetime.now())
    return dados


# ==============================================================================
# PARÂMETROS DE CONSULTA
# ==============================================================================

def _paginacao(filtros: dict, limite_padrao: int) -> dict:
    """
    Resolve a paginação de uma consulta. 'limite' (ou 'limit' igual a 0) pede
    todos os registros e tem precedência sobre 'page' e 'limit'.
    """
    if filtros.get('limite') is not None:
        return {'limite': filtros['limite']}
    if filtros.get('limit') == cfg.LIMITE_TODOS:
        return {'limite': cfg.LIMITE_TODOS}
    return {
        'page': filtros.get('page') or 1,
        'limit': filtros.get('limit') or limite_padrao,
    }


def montar_parametros_vendas(filtros: dict = None) -> dict:
    filtros = filtros or {}
    params = _paginacao(filtros, cfg.LIMITE_PADRAO_VENDAS)

    for campo in ['data_inicio', 'data_fim']:
        if filtros.get(campo):
            params[campo] = filtros[campo]

    status = filtros.get('status_pedido')
    if status:
        params['status_pedido'] = ','.join(status) if isinstance(status, (list, tuple)) else status
    return params


def montar_parametros_estoque(filtros: dict = None) -> dict:
    filtros = filtros or {}
    params = _paginacao(filtros, cfg.LIMITE_PADRAO_ESTOQUE)
    for campo in ['codigo_produto', 'nome_produto', 'estoque_min', 'estoque_max']:
        if filtros.get(campo) is not None and filtros.get(campo) != '':
            params[campo] = filtros[campo]
    return params


def _sem_paginacao(params: dict) -> bool:
    """Consultas por 'limite' não usam page/limit e não têm próxima página."""
    return 'page' not in params


# ==============================================================================
# BUSCA DOS DADOS (COM DADOS DE EXEMPLO COMO RESERVA)
# ==============================================================================

def buscar_vendas(filtros: dict = None) -> pd.DataFrame:
    """
    Busca as vendas na API e devolve o DataFrame normalizado. Sem paginação
    informada, pede todos os registros. Se a API falhar ou não devolver
    nenhuma venda, usa os dados de exemplo.

    Args:
        filtros (dict, optional): page, limit, limite, data_inicio, data_fim, status_pedido.

    Returns:
        pd.DataFrame: Vendas com as colunas de normalizacao.COLUNAS_VENDA.
    """
    filtros = dict(filtros or {})
    if all(filtros.get(campo) is None for campo in ['page', 'limit', 'limite']):
        filtros['limite'] = cfg.LIMITE_TODOS

    try:
        payload = _obter_json(cfg.VENDAS_ENDPOINT, montar_parametros_vendas(filtros))
        registros, _ = norm.extrair_registros(payload, 'vendas')
    except (ErroAPI, ValueError) as e:
        logging.error(f"Falha ao buscar vendas na API: {e}. Usando dados de exemplo.", exc_info=True)
        return norm.normalizar_vendas(dados_exemplo.VENDAS_EXEMPLO)

    if not registros:
        logging.warning("A API não retornou vendas. Usando dados de exemplo.")
        return norm.normalizar_vendas(dados_exemplo.VENDAS_EXEMPLO)

    logging.info(f"Sucesso: {len(registros)} registros de vendas recebidos da API.")
    return norm.normalizar_vendas(registros)


def buscar_clientes() -> pd.DataFrame:
    """Busca o cadastro de clientes; em caso de falha ou lista vazia, usa os dados de exemplo."""
    try:
        payload = _obter_json(cfg.CLIENTES_ENDPOINT)
        registros, _ = norm.extrair_registros(payload, 'clientes')
    except (ErroAPI, ValueError) as e:
        logging.error(f"Falha ao buscar clientes na API: {e}. Usando dados de exemplo.", exc_info=True)
        return norm.normalizar_clientes(dados_exemplo.CLIENTES_EXEMPLO)

    if not registros:
        logging.warning("A API não retornou clientes. Usando dados de exemplo.")
        return norm.normalizar_clientes(dados_exemplo.CLIENTES_EXEMPLO)

    logging.info(f"Sucesso: {len(registros)} clientes recebidos da API.")
    return norm.normalizar_clientes(registros)


def _total_estoque(payload, itens: list, params: dict, usar_cache: bool = True) -> int:
    """
    Total de itens de estoque que atendem aos filtros. Consultas paginadas
    sempre fazem uma consulta de contagem pedindo todos os registros, pois a
    API pode limitar o 'total' ao tamanho da página. Se a contagem falhar,
    vale o total da resposta e, na falta dele, a quantidade de itens recebidos.
    """
    if _sem_paginacao(params):
        return len(itens)

    total_resposta = None
    if isinstance(payload, dict) and isinstance(payload.get('total'), int) and payload['total'] > 0:
        total_resposta = payload['total']

    params_contagem = {chave: valor for chave, valor in params.items() if chave not in ('page', 'limit')}
    params_contagem['limite'] = cfg.LIMITE_TODOS
    try:
        if usar_cache:
            contagem = _obter_json(cfg.ESTOQUE_ENDPOINT, params_contagem)
        else:
            contagem = realizar_requisicao_segura(cfg.ESTOQUE_ENDPOINT, params=params_contagem, retentativas=0)
    except (ErroAPI, ValueError) as e:
        logging.warning(f"Não foi possível contar os itens de estoque: {e}")
        return total_resposta if total_resposta is not None else len(itens)
    registros, total = norm.extrair_registros(contagem, 'estoque')
    return max(total, len(registros))


def _tem_mais_estoque(params: dict, total: int) -> bool:
    if _sem_paginacao(params):
        return False
    return params['page'] * params['limit'] < total


def buscar_estoque(filtros: dict = None) -> dict:
    """
    Busca uma página do estoque.

    Returns:
        dict: {'estoque': DataFrame normalizado, 'total', 'page', 'limit', 'hasMore'}.
              Em caso de falha, o DataFrame vem vazio e o total é 0.
    """
    params = montar_parametros_estoque(filtros)
    resultado = {'page': params.get('page', 1), 'limit': params.get('limit', cfg.LIMITE_TODOS)}

    try:
        payload = _obter_json(cfg.ESTOQUE_ENDPOINT, params)
        registros, _ = norm.extrair_registros(payload, 'estoque')
    except (ErroAPI, ValueError) as e:
        logging.error(f"Falha ao buscar estoque na API: {e}", exc_info=True)
        resultado.update(estoque=norm.normalizar_estoque([]), total=0, hasMore=False)
        return resultado

    total = _total_estoque(payload, registros, params)
    logging.info(f"Sucesso: {len(registros)} itens de estoque recebidos da API (total: {total}).")
    resultado.update(estoque=norm.normalizar_estoque(registros), total=total, hasMore=_tem_mais_estoque(params, total))
    return resultado


def buscar_estoque_com_valores(filtros: dict = None, hoje=None) -> dict:
    """
    Busca o estoque e atualiza o valor unitário de cada item com o preço da
    venda mais recente do produto nos últimos JANELA_VALORES_DIAS dias.
    Se as vendas não puderem ser buscadas, o estoque mantém os próprios valores.
    """
    resultado = buscar_estoque(filtros)
    estoque = resultado['estoque']
    if estoque.empty:
        resultado['estoque'] = estoque.assign(valor_origem=pd.Series(dtype=object))
        return resultado

    referencia = pd.Timestamp(hoje if hoje is not None else datetime.now()).normalize()
    params_vendas = montar_parametros_vendas({
        'limite': cfg.LIMITE_TODOS,
        'data_inicio': (referencia - timedelta(days=cfg.JANELA_VALORES_DIAS)).strftime('%Y-%m-%d'),
        'data_fim': referencia.strftime('%Y-%m-%d'),
    })
    try:
        payload = _obter_json(cfg.VENDAS_ENDPOINT, params_vendas)
        registros, _ = norm.extrair_registros(payload, 'vendas')
    except (ErroAPI, ValueError) as e:
        logging.warning(f"Não foi possível buscar as vendas recentes para valorizar o estoque: {e}")
        registros = []

    vendas = norm.normalizar_vendas(registros)
    resultado['estoque'] = proc.enriquecer_estoque_com_valores(estoque, vendas, hoje=referencia)
    return resultado


def listar_status_vendas(filtros: dict = None) -> list:
    """Status distintos encontrados nas vendas."""
    return proc.listar_status(buscar_vendas(filtros))


# ==============================================================================
# REPASSE (PROXY) PARA AS ROTAS DA API
# ==============================================================================

RECURSOS_PROXY = {
    'vendas': cfg.VENDAS_ENDPOINT,
    'clientes': cfg.CLIENTES_ENDPOINT,
    'estoque': cfg.ESTOQUE_ENDPOINT,
}


def consultar_proxy(recurso: str, filtros: dict = None):
    """
    Repassa uma consulta à API sem cache, sem retentativas e sem dados de exemplo.

    Args:
        recurso (str): 'vendas', 'clientes' ou 'estoque'.
        filtros (dict, optional): Paginação e filtros do recurso.

    Returns:
        tuple: (corpo da resposta, status HTTP). Em caso de erro, o corpo é
               {'error': 'API request failed: <status>', 'details': ...} com o status da API.
    """
    if recurso not in RECURSOS_PROXY:
        raise ValueError(f"Recurso desconhecido: {recurso}")

    filtros = filtros or {}
    if recurso == 'vendas':
        params = montar_parametros_vendas(filtros)
    elif recurso == 'estoque':
        params = montar_parametros_estoque(filtros)
    else:
        params = {chave: valor for chave, valor in filtros.items() if valor is not None}

    try:
        payload = realizar_requisicao_segura(RECURSOS_PROXY[recurso], params=params, retentativas=0)
        registros, total = norm.extrair_registros(payload, recurso)
        if recurso == 'estoque':
            total = _total_estoque(payload, registros, params, usar_cache=False)
    except ErroAPI as e:
        corpo = {'error': str(e), 'details': e.detalhes}
        if recurso == 'estoque':
            corpo.update(estoque=[], total=0)
        return corpo, e.status

    if recurso == 'clientes':
        return {'clientes': registros, 'total': total}, 200

    if _sem_paginacao(params):
        tem_mais = False
    elif recurso == 'vendas':
        tem_mais = len(registros) == params['limit']
    else:
        tem_mais = _tem_mais_estoque(params, total)

    return {
        recurso: registros,
        'total': total,
        'page': params.get('page', 1),
        'limit': params.get('limit', cfg.LIMITE_TODOS),
        'hasMore': tem_mais,
    }, 200
