"""API — camada de borda e adapters de fontes/destinos externos.

Responsabilidades:
- Decodificar e validar payloads de webhook na borda
- Normalizar dados para modelos internos
- Construir payloads para APIs externas

Subpastas:
- normalizers/: conversão de payloads externos → modelos internos
- payload_builders/: construção de payloads para APIs externas

NÃO PODE conter: transporte HTTP, filas, orquestração de use cases.
"""
