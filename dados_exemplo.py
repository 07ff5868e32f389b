# -*- coding: utf-8 -*-

# ==============================================================================
# DADOS DE DEMONSTRAÇÃO
# ==============================================================================
# Registros usados quando a API está indisponível ou não devolve nada.
# Estão no mesmo formato das respostas da API para passarem pela mesma
# normalização. Alguns pedidos têm mais de uma linha (um item por linha).
# ==============================================================================

CLIENTES_EXEMPLO = [
    {"CODIGO_CLIENTE": 1, "NOME_CLIENTE": "Clínica São Lucas", "CPF_CNPJ": "12.345.678/0001-90", "EMAIL": "compras@saolucas.com.br", "CELULAR": "(11) 98765-4321", "UF": "SP", "CIDADE": "São Paulo", "NOME_GRUPO": "Clínicas", "ULTIMA_COMPRA": "18/10/2025"},
    {"CODIGO_CLIENTE": 2, "NOME_CLIENTE": "Hospital Santa Maria", "CPF_CNPJ": "23.456.789/0001-01", "EMAIL": "suprimentos@santamaria.org.br", "CELULAR": "(21) 98765-1234", "UF": "RJ", "CIDADE": "Rio de Janeiro", "NOME_GRUPO": "Hospitais", "ULTIMA_COMPRA": "15/09/2025"},
    {"CODIGO_CLIENTE": 3, "NOME_CLIENTE": "Drogaria Bem Estar", "CPF_CNPJ": "34.567.890/0001-12", "EMAIL": "contato@bemestar.com.br", "CELULAR": "(31) 98765-5678", "UF": "MG", "CIDADE": "Belo Horizonte", "NOME_GRUPO": "Farmácias", "ULTIMA_COMPRA": "10/10/2025"},
    {"CODIGO_CLIENTE": 4, "NOME_CLIENTE": "Ana Paula Costa", "CPF_CNPJ": "123.456.789-00", "EMAIL": "ana.costa@email.com", "CELULAR": "(41) 98765-9012", "UF": "PR", "CIDADE": "Curitiba", "NOME_GRUPO": "Profissionais", "ULTIMA_COMPRA": "12/07/2025"},
    {"CODIGO_CLIENTE": 5, "NOME_CLIENTE": "Laboratório Vida", "CPF_CNPJ": "45.678.901/0001-23", "EMAIL": "lab@vida.com.br", "CELULAR": "(51) 98765-3456", "UF": "RS", "CIDADE": "Porto Alegre", "NOME_GRUPO": "Laboratórios", "ULTIMA_COMPRA": "01/08/2025"},
    {"CODIGO_CLIENTE": 6, "NOME_CLIENTE": "Consultório Dr. Rafael Alves", "CPF_CNPJ": "987.654.321-00", "EMAIL": "rafael.alves@email.com", "CELULAR": "(61) 98765-2345", "UF": "DF", "CIDADE": "Brasília", "NOME_GRUPO": "Profissionais", "ULTIMA_COMPRA": "05/09/2024"},
    {"CODIGO_CLIENTE": 7, "NOME_CLIENTE": "Policlínica Nordeste", "CPF_CNPJ": "56.789.012/0001-34", "EMAIL": "compras@polinordeste.com.br", "CELULAR": "(71) 98765-6789", "UF": "BA", "CIDADE": "Salvador", "NOME_GRUPO": "Clínicas", "ULTIMA_COMPRA": "01/10/2025"},
    {"CODIGO_CLIENTE": 8, "NOME_CLIENTE": "Farmácia Popular Centro", "CPF_CNPJ": "67.890.123/0001-45", "EMAIL": "centro@farmaciapopular.com.br", "CELULAR": "(11) 97654-3210", "UF": "SP", "CIDADE": "Campinas", "NOME_GRUPO": "Farmácias", "ULTIMA_COMPRA": "18/10/2025"},
]

VENDAS_EXEMPLO = [
    {"PEDIDO": "1001", "CODIGO_EXP": 1, "CLIENTE_DOC": "12.345.678/0001-90", "CLIENTE_NOME": "Clínica São Lucas", "VENDEDOR_NOME": "Marcos Lima", "CODIGO_PRO": "LUV-001", "NOME_PRODUTO": "Luva de Procedimento M (cx 100)", "PRODUTO_MARCA": "Supermax", "VALOR_UNITARIO": 32.90, "TOTAL_PEDIDO": 1250.00, "DATA_VENDA": "15/01/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1001", "CODIGO_EXP": 1, "CLIENTE_DOC": "12.345.678/0001-90", "CLIENTE_NOME": "Clínica São Lucas", "VENDEDOR_NOME": "Marcos Lima", "CODIGO_PRO": "MAS-010", "NOME_PRODUTO": "Máscara Cirúrgica Tripla (cx 50)", "PRODUTO_MARCA": "Descarpack", "VALOR_UNITARIO": 18.50, "TOTAL_PEDIDO": 1250.00, "DATA_VENDA": "15/01/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1002", "CODIGO_EXP": 2, "CLIENTE_DOC": "23.456.789/0001-01", "CLIENTE_NOME": "Hospital Santa Maria", "VENDEDOR_NOME": "Juliana Rocha", "CODIGO_PRO": "SER-005", "NOME_PRODUTO": "Seringa 5ml sem agulha (cx 100)", "PRODUTO_MARCA": "BD", "VALOR_UNITARIO": 45.00, "TOTAL_PEDIDO": 3800.00, "DATA_VENDA": "18/01/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1003", "CODIGO_EXP": 3, "CLIENTE_DOC": "34.567.890/0001-12", "CLIENTE_NOME": "Drogaria Bem Estar", "VENDEDOR_NOME": "Marcos Lima", "CODIGO_PRO": "TER-002", "NOME_PRODUTO": "Termômetro Digital", "PRODUTO_MARCA": "G-Tech", "VALOR_UNITARIO": 24.90, "TOTAL_PEDIDO": 747.00, "DATA_VENDA": "05/02/2025", "STATUS_PEDIDO": "PENDENTE"},
    {"PEDIDO": "1004", "CODIGO_EXP": 4, "CLIENTE_DOC": "123.456.789-00", "CLIENTE_NOME": "Ana Paula Costa", "VENDEDOR_NOME": "Carlos Souza", "CODIGO_PRO": "OXI-001", "NOME_PRODUTO": "Oxímetro de Pulso", "PRODUTO_MARCA": "G-Tech", "VALOR_UNITARIO": 89.90, "TOTAL_PEDIDO": 179.80, "DATA_VENDA": "10/02/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1005", "CODIGO_EXP": 5, "CLIENTE_DOC": "45.678.901/0001-23", "CLIENTE_NOME": "Laboratório Vida", "VENDEDOR_NOME": "Juliana Rocha", "CODIGO_PRO": "TUB-004", "NOME_PRODUTO": "Tubo de Coleta a Vácuo EDTA (cx 100)", "PRODUTO_MARCA": "Vacuette", "VALOR_UNITARIO": 68.00, "TOTAL_PEDIDO": 2720.00, "DATA_VENDA": "20/02/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1006", "CODIGO_EXP": 1, "CLIENTE_DOC": "12.345.678/0001-90", "CLIENTE_NOME": "Clínica São Lucas", "VENDEDOR_NOME": "Marcos Lima", "CODIGO_PRO": "GAZ-003", "NOME_PRODUTO": "Gaze Estéril 7,5x7,5 (pct 10)", "PRODUTO_MARCA": "Cremer", "VALOR_UNITARIO": 3.20, "TOTAL_PEDIDO": 640.00, "DATA_VENDA": "01/03/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1007", "CODIGO_EXP": 7, "CLIENTE_DOC": "56.789.012/0001-34", "CLIENTE_NOME": "Policlínica Nordeste", "VENDEDOR_NOME": "Carlos Souza", "CODIGO_PRO": "LUV-001", "NOME_PRODUTO": "Luva de Procedimento M (cx 100)", "PRODUTO_MARCA": "Supermax", "VALOR_UNITARIO": 33.50, "TOTAL_PEDIDO": 1675.00, "DATA_VENDA": "08/03/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1007", "CODIGO_EXP": 7, "CLIENTE_DOC": "56.789.012/0001-34", "CLIENTE_NOME": "Policlínica Nordeste", "VENDEDOR_NOME": "Carlos Souza", "CODIGO_PRO": "ALC-070", "NOME_PRODUTO": "Álcool 70% 1L", "PRODUTO_MARCA": "Asseptgel", "VALOR_UNITARIO": 12.90, "TOTAL_PEDIDO": 1675.00, "DATA_VENDA": "08/03/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1008", "CODIGO_EXP": 6, "CLIENTE_DOC": "987.654.321-00", "CLIENTE_NOME": "Consultório Dr. Rafael Alves", "VENDEDOR_NOME": "Juliana Rocha", "CODIGO_PRO": "EST-001", "NOME_PRODUTO": "Estetoscópio Duo Sonic", "PRODUTO_MARCA": "Littmann", "VALOR_UNITARIO": 540.00, "TOTAL_PEDIDO": 540.00, "DATA_VENDA": "15/03/2025", "STATUS_PEDIDO": "CANCELADO"},
    {"PEDIDO": "1009", "CODIGO_EXP": 8, "CLIENTE_DOC": "67.890.123/0001-45", "CLIENTE_NOME": "Farmácia Popular Centro", "VENDEDOR_NOME": "Marcos Lima", "CODIGO_PRO": "MAS-010", "NOME_PRODUTO": "Máscara Cirúrgica Tripla (cx 50)", "PRODUTO_MARCA": "Descarpack", "VALOR_UNITARIO": 19.00, "TOTAL_PEDIDO": 4200.00, "DATA_VENDA": "18/04/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1010", "CODIGO_EXP": 2, "CLIENTE_DOC": "23.456.789/0001-01", "CLIENTE_NOME": "Hospital Santa Maria", "VENDEDOR_NOME": "Juliana Rocha", "CODIGO_PRO": "CAT-022", "NOME_PRODUTO": "Cateter Intravenoso 22G (cx 50)", "PRODUTO_MARCA": "BD", "VALOR_UNITARIO": 98.00, "TOTAL_PEDIDO": 5500.00, "DATA_VENDA": "05/07/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1011", "CODIGO_EXP": 5, "CLIENTE_DOC": "45.678.901/0001-23", "CLIENTE_NOME": "Laboratório Vida", "VENDEDOR_NOME": "Juliana Rocha", "CODIGO_PRO": "TUB-004", "NOME_PRODUTO": "Tubo de Coleta a Vácuo EDTA (cx 100)", "PRODUTO_MARCA": "Vacuette", "VALOR_UNITARIO": 70.00, "TOTAL_PEDIDO": 2900.00, "DATA_VENDA": "01/08/2025", "STATUS_PEDIDO": "PENDENTE"},
    {"PEDIDO": "1012", "CODIGO_EXP": 3, "CLIENTE_DOC": "34.567.890/0001-12", "CLIENTE_NOME": "Drogaria Bem Estar", "VENDEDOR_NOME": "Marcos Lima", "CODIGO_PRO": "TER-002", "NOME_PRODUTO": "Termômetro Digital", "PRODUTO_MARCA": "G-Tech", "VALOR_UNITARIO": 25.90, "TOTAL_PEDIDO": 2600.00, "DATA_VENDA": "10/10/2025", "STATUS_PEDIDO": "OK"},
    {"PEDIDO": "1013", "CODIGO_EXP": 8, "CLIENTE_DOC": "67.890.123/0001-45", "CLIENTE_NOME": "Farmácia Popular Centro", "VENDEDOR_NOME": "Carlos Souza", "CODIGO_PRO": "ALC-070", "NOME_PRODUTO": "Álcool 70% 1L", "PRODUTO_MARCA": "Asseptgel", "VALOR_UNITARIO": 13.50, "TOTAL_PEDIDO": 1100.00, "DATA_VENDA": "18/10/2025", "STATUS_PEDIDO": "OK"},
]
