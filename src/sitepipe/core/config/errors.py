# src/sitepipe/core/config/errors.py
"""
Exceções da camada de configuração do sitepipe.

Todas as falhas de carregamento e merge são fatais: nenhum build começa
com uma configuração parcialmente resolvida.
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração.

    Permite capturar de forma genérica qualquer falha de carregamento ou
    merge, separando-as das falhas de execução do grafo.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O defaults distribuído com o pacote é obrigatório; um caminho
    alternativo que não existe também é tratado como erro.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    O formato é decidido pela extensão, nunca pelo conteúdo.
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Conteúdo raiz da configuração não é um dicionário.

    Listas ou valores escalares no root são rejeitados sem normalização.
    """


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"listing": {"descending": true}}
        - override: {"listing": "index.html"}

    Nenhum merge parcial é produzido em caso de conflito.
    """
