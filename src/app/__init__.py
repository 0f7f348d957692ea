"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (sincronização de bookings)
- services/: serviços de aplicação (classificação, projeção, dedupe)
- infra/: implementações concretas de IO (HTTP, stores)
- protocols/: contratos/interfaces
- domain/: modelos de booking e notificação
- observability/: correlation_id e métricas em logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
