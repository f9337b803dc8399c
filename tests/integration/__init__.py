"""
Integration tests package.

Tests de integración que verifican el funcionamiento correcto de:
- Aprobaciones concurrentes sobre el mismo turno
- Reintento ante bloqueos de la base de datos
- Health checks y arranque sin base de datos

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
