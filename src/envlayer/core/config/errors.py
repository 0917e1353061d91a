# src/envlayer/core/config/errors.py
"""
Exceções canônicas da camada de configuração do envlayer.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a escrita, leitura e merge da árvore de configuração (`ConfigStore`) e
durante o carregamento das settings do próprio assembler.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de contexto, preset ou fragmento

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende do assembler nem do loader de camadas
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do envlayer.

    Todas as exceções levantadas durante escrita, leitura, merge e
    carregamento de settings devem herdar desta classe, permitindo
    captura genérica de falhas de configuração.
    """


class NotFoundError(ConfigError, KeyError):
    """
    Exceção levantada quando um key path não existe no `ConfigStore`.

    Herda também de `KeyError` para que chamadores que tratam a árvore
    como um mapeamento comum continuem funcionando.
    """

    def __str__(self) -> str:
        # KeyError usa repr() dos args; aqui a mensagem é texto humano
        return str(self.args[0]) if self.args else ""


class StoreFrozenError(ConfigError):
    """
    Exceção levantada quando se tenta escrever em um `ConfigStore`
    já congelado.

    Invariantes:
        - Após `freeze()`, a árvore é somente leitura até o fim do processo
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito estrutural na árvore.

    Exemplos de conflito:
        - escrever `SYS.caching.x` quando `SYS.caching` é uma string
        - deep-merge de `{"FE": {"debug": true}}` com `{"FE": "off"}`

    Limites explícitos:
        - Não realiza coerção ou conversão de tipos
        - Não tenta resolver conflitos automaticamente
    """


class SettingsNotFoundError(ConfigError):
    """Arquivo de settings (defaults) não encontrado."""


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um dicionário (`dict`)."""


class InvalidSettingsError(ConfigError):
    """Settings contém chaves desconhecidas ou valores de tipo inválido."""
