# src/sitepipe/stages/__init__.py
"""
Estágios concretos do build de site.

Cada subpacote agrupa Pipes por responsabilidade:
    - io        → leitura de arquivos de origem e escrita da saída
    - content   → parsing de posts (preâmbulo de metadados + markdown)
    - render    → compilação e renderização de templates Jinja2
    - aggregate → barreira many-to-one com ordenação (listagem de posts)
    - inspect   → passthrough de observabilidade (log de registros)
"""
