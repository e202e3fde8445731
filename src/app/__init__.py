"""App — coração do sistema: orquestração, casos de uso e contratos.

Subpastas:
- bootstrap/: composition root (logging, settings, wiring)
- use_cases/: casos de uso (inputs/outputs, sem IO direto)
- protocols/: contratos/interfaces
- domain/: modelos canônicos e de exibição
- observability/: logs estruturados, tracing, métricas
- constants/: constantes da aplicação

Padrão: app executa; api adapta; config configura; utils apoia.
"""
