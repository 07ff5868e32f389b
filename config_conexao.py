# -*- coding: utf-8 -*-

# ==============================================================================
# MÓDULO DE CONFIGURAÇÃO CENTRAL
# ==============================================================================
# Este arquivo centraliza as configurações da aplicação: URL e token da API,
# política de requisições (timeout e retentativas), validade do cache e as
# constantes de negócio usadas nas análises (status válido, janelas de dias,
# tamanhos de ranking e de página).
# Valores que mudam entre ambientes podem ser sobrescritos por variáveis de ambiente.
# ==============================================================================


# ==============================================================================
# IMPORTAÇÃO DE BIBLIOTECAS
# ==============================================================================
import os  # Para ler variáveis de ambiente e montar caminhos de arquivos.


# ==============================================================================
# CREDENCIAIS E ENDPOINTS DA API
# ==============================================================================

# URL base da API de dados da distribuidora. Todos os endpoints partem desta URL.
API_BASE_URL = os.environ.get("API_BASE_URL", "http://24.152.15.254:8000").rstrip("/")

# Token Bearer da API. Quando ausente, as requisições seguem sem o cabeçalho Authorization.
API_AUTH_TOKEN = os.environ.get("API_TOKEN")

# Endpoints de cada recurso.
VENDAS_ENDPOINT = f"{API_BASE_URL}/vendas"      # Linhas de venda (uma por item de pedido).
CLIENTES_ENDPOINT = f"{API_BASE_URL}/clientes"  # Cadastro de clientes.
ESTOQUE_ENDPOINT = f"{API_BASE_URL}/estoque"    # Posição de estoque por produto.


# ==============================================================================
# POLÍTICA DE REQUISIÇÕES
# ==============================================================================

TIMEOUT_REQUISICAO_S = int(os.environ.get("TIMEOUT_REQUISICAO_S", "30"))

# Número de novas tentativas após a primeira falha (2 retentativas = 3 tentativas no total).
MAX_RETENTATIVAS = 2

# Pausa, em segundos, entre uma tentativa e a próxima.
INTERVALO_RETENTATIVAS_S = float(os.environ.get("INTERVALO_RETENTATIVAS_S", "2"))


# ==============================================================================
# CACHE E PAGINAÇÃO
# ==============================================================================

# Tempo (em minutos) durante o qual uma resposta da API é considerada atual.
CACHE_DURATION_MINUTES = 5

# Valor sentinela do parâmetro 'limite': pede à API todos os registros de uma vez.
LIMITE_TODOS = 0

LIMITE_PADRAO_VENDAS = 100
LIMITE_PADRAO_ESTOQUE = 10

# Tamanho da página das tabelas entregues ao front-end.
ITENS_POR_PAGINA = 10


# ==============================================================================
# REGRAS DE NEGÓCIO
# ==============================================================================

# Apenas vendas com este status entram em rankings e contagem de clientes ativos.
STATUS_OK = "OK"

# Janela (em dias) de vendas usada para descobrir o valor unitário atual de cada produto.
JANELA_VALORES_DIAS = 30

# Cliente sem compras há mais dias do que isto é considerado inativo.
DIAS_INATIVIDADE = 90

TOP_CATEGORIAS = 6
TOP_PEDIDOS_RECENTES = 5
TOP_GRAFICO = 10


# ==============================================================================
# CONFIGURAÇÕES DE LOG
# ==============================================================================

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

LOG_FILE = os.environ.get("LOG_FILE", os.path.join(BASE_DIR, "log.txt"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
