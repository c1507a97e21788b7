# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do sitepipe.

Este módulo contém testes mínimos cujo único objetivo é garantir que:
- o pacote é importável
- o ambiente de testes (pytest) está funcional

Limites explícitos:
    - Não testar lógica de negócio
    - Não testar fluxo de execução
"""


def test_smoke():
    """
    Smoke test mínimo do repositório.

    Ele **não valida comportamento de domínio**; serve como sentinela
    inicial de integridade do pacote e de sua API pública.
    """
    import sitepipe

    assert sitepipe.__version__
    assert {"FileRecord", "Pipe", "RunContext", "Engine"} <= set(sitepipe.__all__)
